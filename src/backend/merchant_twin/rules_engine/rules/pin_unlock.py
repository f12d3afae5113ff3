from __future__ import annotations

from ...twin.schema import AccountStatus, KycStatus
from ..models import Severity
from ..predicates import account_is, kyc_is, pin_not_locked, sim_swapped_within
from ..registry import register_rule
from ..rule import Check, PassGate, Rule


@register_rule
class PIN_UNLOCK(Rule):
    action_key = "PIN_UNLOCK"
    label = "Unlock PIN"
    demand_rank = 11
    demand_total = 3788
    menu_path = "Security & PIN → Unlock PIN"
    ussd_path = "*234# → 2 → 2"
    description = "Merchant unlocks their PIN after security lockout."

    gate = PassGate(
        when=pin_not_locked,
        message="PIN is not locked. Current failed attempts: {pin_attempts}/3. No unlock needed.",
    )
    checks = (
        Check(
            "ACC_SUSPENDED_UNLOCK",
            Severity.CRITICAL,
            account_is(AccountStatus.SUSPENDED),
            inline="Cannot unlock PIN: account is suspended.",
            reason="Account suspension blocks all authentication management including PIN unlock.",
            fix="Resolve the suspension first (call 100), then proceed with PIN unlock.",
        ),
        Check(
            "KYC_EXPIRED_UNLOCK",
            Severity.HIGH,
            kyc_is(KycStatus.EXPIRED),
            inline="PIN unlock requires valid KYC. Your KYC has expired.",
            reason="Identity verification for PIN unlock fails when KYC is expired.",
            fix="Renew KYC at Safaricom Shop, then return for PIN unlock via OTP.",
        ),
        Check(
            "SIM_SWAP_PIN_UNLOCK",
            Severity.MEDIUM,
            sim_swapped_within(7),
            inline="PIN unlock blocked: SIM swap too recent ({sim_swap_days_ago} day(s) ago).",
            reason="OTP for PIN unlock cannot be sent to a new SIM within 7 days of swap.",
            fix="Wait {hold_remaining} more day(s), or visit Safaricom Shop in person for immediate unlock.",
            hold_days=7,
        ),
    )
    success_message = (
        "PIN unlock OTP sent to {phone_number}. Enter the code within 5 minutes to complete unlock. "
        "Your PIN will reset to a new value."
    )
