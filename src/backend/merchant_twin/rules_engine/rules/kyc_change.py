from __future__ import annotations

from ...twin.schema import AccountStatus, KycStatus
from ..models import Severity
from ..predicates import account_is, kyc_is, sim_swapped_within
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class KYC_CHANGE(Rule):
    action_key = "KYC_CHANGE"
    label = "Update KYC Details"
    demand_rank = 7
    demand_total = 8157
    menu_path = "My Account → Update KYC Details"
    ussd_path = "*234# → 3 → 2"
    description = "Merchant updates identity or business KYC information."

    checks = (
        Check(
            "ACC_FROZEN",
            Severity.CRITICAL,
            account_is(AccountStatus.FROZEN),
            inline="KYC changes blocked: account is frozen.",
            reason="Frozen accounts require compliance clearance before any KYC modifications.",
            fix="Request account unfreeze first via 0722 000 100, then resubmit KYC change.",
        ),
        Check(
            "SIM_SWAP_KYC_HOLD",
            Severity.MEDIUM,
            sim_swapped_within(14),
            inline="KYC change blocked: {hold_remaining} day(s) remaining on post-SIM swap hold.",
            reason="A 14-day fraud prevention hold restricts KYC changes after every SIM swap.",
            fix="Wait {hold_remaining} day(s), or visit Safaricom Shop in person for an assisted KYC update.",
            hold_days=14,
        ),
        Check(
            "KYC_REVIEW_ACTIVE",
            Severity.MEDIUM,
            kyc_is(KycStatus.PENDING),
            inline="KYC change locked: a review is already in progress.",
            reason="You cannot modify KYC details while an existing review is active.",
            fix="Wait 24-48 hours for current review to complete, then submit your changes.",
        ),
    )
    success_message = (
        "KYC update submitted for paybill {paybill}. Review expected within 24-48 hours. "
        "Reference: KYC-{document_number}."
    )
