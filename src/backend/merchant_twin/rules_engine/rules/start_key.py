from __future__ import annotations

from ...twin.schema import StartKeyStatus
from ..models import Severity
from ..predicates import account_not_active, sim_swapped_within, start_key_is
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class START_KEY(Rule):
    action_key = "START_KEY"
    label = "Reset Start Key"
    demand_rank = 5
    demand_total = 9303
    menu_path = "Security & PIN → Reset Start Key"
    ussd_path = "*234# → 2 → 3"
    description = "Merchant resets their cryptographic start key used to authenticate transactions."

    checks = (
        Check(
            "START_KEY_EXPIRED",
            Severity.CRITICAL,
            start_key_is(StartKeyStatus.EXPIRED),
            inline="Start key expired: you cannot send or receive any payments.",
            reason=(
                "An expired start key completely breaks the merchant payment pipeline. "
                "Customers cannot pay you."
            ),
            fix="Request urgent start key renewal via the Safaricom Business portal or call 100 immediately.",
        ),
        Check(
            "START_KEY_CORRUPT",
            Severity.CRITICAL,
            start_key_is(StartKeyStatus.INVALID),
            inline="Start key is corrupted. Customer payments are actively failing.",
            reason=(
                "Key corruption is caused by SIM swap without re-registration, or a system error. "
                "Payments fail silently."
            ),
            fix="Visit any Safaricom Shop immediately with National ID. Request emergency start key regeneration.",
        ),
        Check(
            "ACC_NOT_ACTIVE",
            Severity.HIGH,
            account_not_active,
            inline="Start key reset requires an active account.",
            reason="Key operations are locked when account is {account_status}.",
            fix="Reactivate the account first, then retry the start key reset.",
        ),
        Check(
            "SIM_SWAP_KEY_HOLD",
            Severity.MEDIUM,
            sim_swapped_within(2),
            inline="Start key reset available in {hold_remaining} day(s): SIM swap too recent.",
            reason="System requires SIM stabilisation before issuing new start key.",
            fix="Wait 1-2 days after SIM swap, then retry. Or visit Safaricom Shop for same-day resolution.",
            hold_days=2,
        ),
    )
    success_message = (
        "Start key reset successful. New key provisioned to {phone_number}. "
        "Key activates within 5 minutes. Test a payment to confirm."
    )
