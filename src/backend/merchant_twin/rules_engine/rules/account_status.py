from __future__ import annotations

from ...twin.schema import AccountStatus
from ..models import Severity
from ..predicates import account_is, dormant_at_least, fully_operational, kyc_older_than
from ..registry import register_rule
from ..rule import Check, PassGate, Rule


@register_rule
class ACCOUNT_STATUS(Rule):
    action_key = "ACCOUNT_STATUS"
    label = "Account Status & Issues"
    demand_rank = 4
    demand_total = 9951
    menu_path = "My Account → Account Status & Issues"
    ussd_path = "*234# → 3 → 1"
    description = "Merchant checks or resolves account suspension / freeze."

    gate = PassGate(
        when=fully_operational,
        message=(
            "Account is fully active. KYC: VERIFIED. Last activity: {dormant_days} day(s) ago. "
            "All services operational."
        ),
    )
    checks = (
        Check(
            "KYC_OVERDUE_365",
            Severity.CRITICAL,
            kyc_older_than(365),
            inline="Account frozen: KYC overdue by {kyc_overdue_days} day(s).",
            reason="Accounts with KYC older than 1 year are automatically frozen per Safaricom compliance policy.",
            fix="Renew KYC immediately at any Safaricom Shop. Bring: National ID, Business Certificate, KRA PIN.",
        ),
        Check(
            "FULLY_DORMANT",
            Severity.CRITICAL,
            dormant_at_least(90),
            inline="Account suspended: no transactions in {dormant_days} days.",
            reason="Accounts with no activity for 90+ days are automatically suspended by the dormancy system.",
            fix="Visit Safaricom Shop or call 100 to reactivate. A transaction history review will be required.",
        ),
        Check(
            "DORMANT_60",
            Severity.HIGH,
            dormant_at_least(60),
            inline="Account suspended: inactive for {dormant_days} days.",
            reason="Dormancy suspension is triggered at 60 days of inactivity.",
            fix="Call 100 or visit Safaricom Shop with National ID to reactivate your account.",
        ),
        Check(
            "COMPLIANCE_FREEZE",
            Severity.CRITICAL,
            account_is(AccountStatus.FROZEN),
            inline="Account is under a compliance freeze. All services restricted.",
            reason="The compliance team has placed a hold on your account for regulatory review.",
            fix="Contact Safaricom Business Compliance: 0722 000 100. Have paybill {paybill} and ID ready.",
        ),
        Check(
            "COMPLIANCE_HOLD",
            Severity.HIGH,
            account_is(AccountStatus.SUSPENDED),
            inline="Account is suspended. Services are restricted.",
            reason="Account suspension may be due to inactivity, compliance review, or manual hold.",
            fix="Call 100 or visit Safaricom Shop with National ID to resolve and reactivate.",
        ),
    )
    success_message = (
        "Account status: {account_status_upper}. KYC: {kyc_status_upper}. "
        "Dormant days: {dormant_days}. Review required."
    )
