from __future__ import annotations

from ...twin.schema import AccountStatus
from ..models import Severity
from ..predicates import account_is, pin_locked
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class BALANCE(Rule):
    action_key = "BALANCE"
    label = "Balance Enquiry"
    demand_rank = 9
    demand_total = 4439
    menu_path = "Lipa na M-PESA → Balance Enquiry"
    ussd_path = "*234# → 1 → 2"
    description = "Merchant checks available paybill balance."

    checks = (
        Check(
            "ACC_FROZEN_BAL",
            Severity.MEDIUM,
            account_is(AccountStatus.FROZEN),
            inline="Balance display restricted: account is frozen.",
            reason="Frozen accounts have read-limited access. Balance cannot be confirmed via self-service.",
            fix="Contact 0722 000 100 for a balance confirmation from a Safaricom agent.",
        ),
        Check(
            "PIN_LOCKED_BAL",
            Severity.HIGH,
            pin_locked,
            inline="Balance enquiry unavailable: PIN is locked.",
            reason="PIN lockout restricts all authenticated account actions including balance checks.",
            fix="Reset PIN at any Safaricom Shop with National ID, then retry balance enquiry.",
        ),
    )
    success_message = (
        "Available Balance: {balance_kes} | Paybill: {paybill} | Last activity: {dormant_days} day(s) ago."
    )
