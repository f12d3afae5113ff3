from __future__ import annotations

from ...twin.schema import AccountStatus
from ..models import Severity
from ..predicates import account_is, pin_locked, sim_swapped_within
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class PIN_PUK(Rule):
    action_key = "PIN_PUK"
    label = "Change / Reset PIN"
    demand_rank = 2
    demand_total = 11353
    menu_path = "Security & PIN → Change / Reset PIN"
    ussd_path = "*234# → 2 → 1"
    description = "Merchant changes or resets their M-PESA Business PIN."

    checks = (
        Check(
            "ACC_SUSPENDED",
            Severity.CRITICAL,
            account_is(AccountStatus.SUSPENDED),
            inline="PIN operations are blocked: account is suspended.",
            reason="Account suspension restricts all authentication and security operations.",
            fix="Resolve the account suspension first by calling 100 or visiting Safaricom Shop.",
        ),
        Check(
            "PIN_LOCKED",
            Severity.HIGH,
            pin_locked,
            inline="Account locked after 3 failed PIN attempts.",
            reason="Security lockout is triggered automatically after 3 consecutive wrong PINs.",
            fix=(
                "Visit any Safaricom Shop with your National ID for PIN reset. "
                "USSD/App self-service is unavailable after lockout."
            ),
        ),
        Check(
            "SIM_SWAP_RECENT",
            Severity.MEDIUM,
            sim_swapped_within(7),
            inline="PIN request blocked: SIM swap was {sim_swap_days_ago} day(s) ago (7-day hold).",
            reason="A 7-day security hold prevents PIN changes immediately after SIM swap.",
            fix="Wait {hold_remaining} more day(s) or visit Safaricom Shop in person.",
            hold_days=7,
        ),
    )
    success_message = "PIN/PUK request initiated. A confirmation SMS will be sent to {phone_number} within 2 minutes."
