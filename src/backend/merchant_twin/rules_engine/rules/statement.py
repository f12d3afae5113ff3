from __future__ import annotations

from ...twin.schema import AccountStatus
from ..models import Severity
from ..predicates import account_is, notifications_off
from ..registry import register_rule
from ..rule import Check, Rule, warn


@register_rule
class STATEMENT(Rule):
    action_key = "STATEMENT"
    label = "Mini Statement"
    demand_rank = 6
    demand_total = 8330
    menu_path = "Lipa na M-PESA → Mini Statement"
    ussd_path = "*234# → 1 → 3"
    description = "Merchant requests a transaction statement for the last 90 days."

    checks = (
        Check(
            "ACC_SUSPENDED",
            Severity.MEDIUM,
            account_is(AccountStatus.SUSPENDED),
            inline="Statement access restricted: account is suspended.",
            reason="Suspended accounts have limited portal access. Full statements are unavailable.",
            fix="Call 100 for a partial statement via agent access. Resolve suspension to restore full access.",
        ),
        Check(
            "ACC_FROZEN",
            Severity.MEDIUM,
            account_is(AccountStatus.FROZEN),
            inline="Statement access restricted: account is under compliance freeze.",
            reason="Frozen accounts have read-restricted access. Statement generation is paused.",
            fix="Contact the compliance team on 0722 000 100 to request a statement during the freeze period.",
        ),
        warn(
            "NOTIF_OFF",
            Severity.LOW,
            notifications_off,
            inline="Statement generated but cannot be delivered: notifications are disabled.",
            reason=(
                "SMS and email notifications are turned off on your account. "
                "The statement was created but won't be sent."
            ),
            fix="Enable notifications: App > Settings > Notifications > Enable All. Then request statement again.",
        ),
    )
    success_message = (
        "Statement for paybill {paybill} generated and sent to {email} and {phone_number}. "
        "Covers last 90 days."
    )
