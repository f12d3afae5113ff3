from __future__ import annotations

from ...twin.schema import AccountStatus, KycStatus
from ..models import Severity
from ..predicates import account_is, balance_empty, kyc_is, settlement_held, sim_swapped_within
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class SETTLE_FUNDS(Rule):
    action_key = "SETTLE_FUNDS"
    label = "Withdraw / Settle Funds"
    demand_rank = 1
    demand_total = 14144
    menu_path = "Lipa na M-PESA → Withdraw / Settle Funds"
    ussd_path = "*234# → 1 → 1"
    description = "Merchant withdraws accumulated paybill balance to their bank account."

    checks = (
        Check(
            "ACC_SUSPENDED",
            Severity.CRITICAL,
            account_is(AccountStatus.SUSPENDED),
            inline="Your account is suspended. Settlement is blocked.",
            reason="Account suspension prevents all fund disbursements until resolved.",
            fix="Visit the nearest Safaricom Shop or call 100 with your National ID to resolve the suspension.",
        ),
        Check(
            "ACC_FROZEN",
            Severity.CRITICAL,
            account_is(AccountStatus.FROZEN),
            inline="Account frozen: settlement on hold pending compliance review.",
            reason=(
                "A compliance hold prevents outflows. This is triggered by regulatory review "
                "or KYC overdue >365 days."
            ),
            fix="Contact Safaricom Business Compliance on 0722 000 100 to initiate account unfreeze.",
        ),
        Check(
            "SETTLE_HOLD",
            Severity.HIGH,
            settlement_held,
            inline="Settlement is manually on hold for your paybill {paybill}.",
            reason="A settlement hold has been applied, often after a dispute or fraud investigation.",
            fix="Call 100 and reference your paybill {paybill} to request hold removal.",
        ),
        Check(
            "KYC_EXPIRED",
            Severity.HIGH,
            kyc_is(KycStatus.EXPIRED),
            inline="Settlement blocked: your KYC documents have expired.",
            reason="CBK regulations require valid KYC for all fund settlements. Your KYC is {kyc_age_days} days old.",
            fix="Update KYC at any Safaricom Shop. Bring: National ID + business certificate.",
        ),
        Check(
            "SIM_SWAP_HOLD",
            Severity.MEDIUM,
            sim_swapped_within(30),
            inline="Settlement locked for {hold_remaining} more day(s) after SIM swap.",
            reason="A 30-day fraud prevention hold applies after every SIM swap event.",
            fix="Wait {hold_remaining} day(s) or visit Safaricom Shop with original ID to request early lift.",
            hold_days=30,
        ),
        Check(
            "ZERO_BALANCE",
            Severity.HIGH,
            balance_empty,
            inline="No balance available to settle.",
            reason="Your paybill has zero balance, so there is nothing to disburse.",
            fix="Accept customer payments to accumulate balance, then initiate settlement.",
        ),
    )
    success_message = (
        "Settlement of {balance_kes} processed to {bank_account_name} ({bank}). "
        "Funds arrive within 24 working hours."
    )
