from __future__ import annotations

from ..models import Severity
from ..predicates import operator_dormant_at_least
from ..registry import register_rule
from ..rule import Check, Rule, warn


@register_rule
class DORMANT_OP(Rule):
    action_key = "DORMANT_OP"
    label = "Operator Status"
    demand_rank = 10
    demand_total = 3778
    menu_path = "SIM & Operator → Operator Status"
    ussd_path = "*234# → 4 → 2"
    description = "Merchant checks G2 operator active status and dormancy days."

    checks = (
        Check(
            "OP_FULLY_DORMANT",
            Severity.CRITICAL,
            operator_dormant_at_least(90),
            inline="Operator access revoked: inactive for {operator_dormant_days} days.",
            reason="G2 operator permissions are automatically revoked after 90 days without login or transaction.",
            fix=(
                "Visit Safaricom Shop for operator reactivation. "
                "Bring: National ID + business registration documents."
            ),
        ),
        Check(
            "OP_DORMANT_WARN",
            Severity.HIGH,
            operator_dormant_at_least(60),
            inline="Warning: Operator approaching dormancy lock ({operator_dormant_days}/90 days inactive).",
            reason="Operator will be fully locked in {op_days_to_lock} day(s) if no action is taken.",
            fix="Initiate any transaction or G2 login now to reset your dormancy timer.",
        ),
        warn(
            "OP_DORMANT_NOTICE",
            Severity.LOW,
            operator_dormant_at_least(30),
            inline="Operator inactive for {operator_dormant_days} days. Dormancy warning at 60 days.",
            reason="Early notice: operator has been inactive for {operator_dormant_days} days.",
            fix="Make a transaction soon to prevent dormancy escalation.",
        ),
    )
    success_message = (
        "Operator is active. Last activity {operator_dormant_days} day(s) ago. "
        "Dormancy warning triggers at 60 days. You are clear."
    )
