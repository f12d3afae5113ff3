from __future__ import annotations

from ..models import Severity
from ..predicates import account_not_active, notifications_off, sim_swapped
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class NOTIFICATIONS(Rule):
    action_key = "NOTIFICATIONS"
    label = "Notification Settings"
    demand_rank = 8
    demand_total = 5013
    menu_path = "My Account → Notification Settings"
    ussd_path = "*234# → 3 → 4"
    description = "Merchant manages SMS and push notification preferences."

    checks = (
        Check(
            "NOTIF_DISABLED",
            Severity.LOW,
            notifications_off,
            inline="Notifications are OFF: you will miss payment alerts, settlement SMS, and security warnings.",
            reason=(
                "Your account has notifications disabled. This causes missed payment confirmations "
                "and delayed fraud alerts."
            ),
            fix="Enable via: App > Settings > Notifications > Enable All. Or: *234# > 3 > 4.",
        ),
        Check(
            "SIM_NOTIF_UNREG",
            Severity.MEDIUM,
            sim_swapped,
            inline="New SIM not registered: notifications are going to your old number.",
            reason="SIM swap does not automatically re-register notification channels. Your old SIM receives alerts.",
            fix="Update via: *234# > My Account > Update Phone Number, or visit Safaricom Shop.",
        ),
        Check(
            "ACC_INACTIVE_NOTIF",
            Severity.MEDIUM,
            account_not_active,
            inline="Notifications are paused while account is {account_status}.",
            reason="Non-active accounts have notification services suspended as part of account lifecycle policy.",
            fix="Reactivate the account to restore full notification delivery.",
        ),
    )
    success_message = (
        "Notification test sent to {phone_number} and {email}. All channels are operational. "
        "You will receive payment and security alerts in real time."
    )
