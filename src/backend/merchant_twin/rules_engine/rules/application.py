from __future__ import annotations

from ...twin.schema import AccountStatus, KycStatus
from ..models import Severity
from ..predicates import account_is, kyc_is
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class APPLICATION(Rule):
    action_key = "APPLICATION"
    label = "New Application"
    demand_rank = 12
    demand_total = 3483
    menu_path = "My Account → New Application"
    ussd_path = "*234# → 3 → 3"
    description = "Merchant submits a new paybill or product application."

    checks = (
        Check(
            "KYC_EXPIRED_APP",
            Severity.HIGH,
            kyc_is(KycStatus.EXPIRED),
            inline="Application rejected: KYC has expired.",
            reason="All new applications require valid KYC on file. Your KYC expired {kyc_overdue_days} day(s) ago.",
            fix="Renew KYC first. Required documents: National ID, Business Certificate, KRA PIN.",
        ),
        Check(
            "KYC_PENDING_APP",
            Severity.MEDIUM,
            kyc_is(KycStatus.PENDING),
            inline="Application on hold: KYC review is in progress.",
            reason="New applications cannot be processed while a KYC review is active for the same merchant.",
            fix="Wait 24-48hrs for current KYC review to complete, then resubmit.",
        ),
        Check(
            "ACC_SUSPENDED_APP",
            Severity.CRITICAL,
            account_is(AccountStatus.SUSPENDED),
            inline="Application blocked: account is suspended.",
            reason="Suspended merchants cannot initiate new product applications.",
            fix="Resolve the suspension first, then resubmit your application.",
        ),
        Check(
            "ACC_FROZEN_APP",
            Severity.CRITICAL,
            account_is(AccountStatus.FROZEN),
            inline="Application blocked: account is frozen.",
            reason="Frozen accounts cannot initiate new applications until the compliance freeze is lifted.",
            fix="Contact the compliance team to unfreeze, then resubmit.",
        ),
    )
    # References are derived from the paybill so repeated evaluations stay identical.
    success_message = (
        "Application submitted for paybill {paybill}. Reference: APP-{paybill}. "
        "Expected review: 3-5 business days."
    )
