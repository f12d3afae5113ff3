from __future__ import annotations

from ...twin.schema import AccountStatus, KycStatus
from ..models import Severity
from ..predicates import account_is, kyc_is, pin_locked
from ..registry import register_rule
from ..rule import Check, Rule


@register_rule
class SIM_SWAP(Rule):
    action_key = "SIM_SWAP"
    label = "SIM Swap Request"
    demand_rank = 3
    demand_total = 10076
    menu_path = "SIM & Operator → SIM Swap Request"
    ussd_path = "*234# → 4 → 1"
    description = "Merchant requests replacement SIM for their registered number."

    checks = (
        Check(
            "ACC_FROZEN",
            Severity.CRITICAL,
            account_is(AccountStatus.FROZEN),
            inline="SIM swap not permitted: account is frozen.",
            reason="Frozen accounts cannot process identity changes until the freeze is lifted.",
            fix="Request account unfreeze via 0722 000 100, then retry SIM swap.",
        ),
        Check(
            "ACC_SUSPENDED",
            Severity.CRITICAL,
            account_is(AccountStatus.SUSPENDED),
            inline="SIM swap blocked: account is suspended.",
            reason="Suspended accounts cannot initiate SIM swaps.",
            fix="Resolve the suspension first by calling 100 or visiting Safaricom Shop.",
        ),
        Check(
            "KYC_EXPIRED",
            Severity.HIGH,
            kyc_is(KycStatus.EXPIRED),
            inline="SIM swap requires valid KYC. Yours expired {kyc_overdue_days} day(s) ago.",
            reason="CBK regulatory requirement: valid KYC must be on file for SIM swap.",
            fix="Renew KYC at any Safaricom Shop before proceeding with SIM swap.",
        ),
        Check(
            "KYC_PENDING",
            Severity.MEDIUM,
            kyc_is(KycStatus.PENDING),
            inline="SIM swap on hold: KYC review is still in progress.",
            reason="Cannot process SIM swap while KYC is actively under review.",
            fix="Wait 24-48hrs for KYC approval, or visit Safaricom Shop to expedite review.",
        ),
        Check(
            "PIN_LOCKED",
            Severity.HIGH,
            pin_locked,
            inline="Cannot process SIM swap: PIN is locked.",
            reason="A valid PIN is required to authenticate the SIM swap request.",
            fix="Reset PIN at Safaricom Shop first, then retry SIM swap.",
        ),
    )
    success_message = (
        "SIM swap initiated. Present your National ID at any Safaricom Shop. "
        "Reference: SWP-{paybill}. Processing takes 2-4 hours."
    )
