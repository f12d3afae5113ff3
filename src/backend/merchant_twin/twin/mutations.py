"""Merchant state transitions.

Every transition takes a snapshot and returns a new, validated snapshot tagged
with the mutation name and timestamp. Inputs are never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Tuple, Union

from pydantic import ValidationError

from ..errors import InvalidMerchantStateError
from .schema import (
    PIN_LOCK_THRESHOLD,
    AccountStatus,
    KycStatus,
    Merchant,
    SimStatus,
    StartKeyStatus,
)

logger = logging.getLogger(__name__)

KYC_EXPIRY_DAYS = 365
DORMANCY_SUSPEND_DAYS = 60
START_KEY_EXPIRY_DAYS = 540


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _transition(merchant: Merchant, mutation: str, now: Optional[datetime], **changes: Any) -> Merchant:
    payload = merchant.model_dump()
    payload.update(changes)
    payload["last_mutation"] = mutation
    payload["mutated_at"] = _now(now)
    try:
        updated = Merchant.model_validate(payload)
    except ValidationError as exc:
        raise InvalidMerchantStateError(
            f"{mutation} would leave merchant {merchant.id!r} in an invalid state: {exc}",
            merchant_id=merchant.id,
        ) from exc
    logger.debug("Applied %s to merchant %s", mutation, merchant.id)
    return updated


def _require_days(days: Any) -> int:
    if not isinstance(days, int) or isinstance(days, bool):
        raise ValueError(f"days must be an integer, got {days!r}")
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")
    return days


def apply_sim_swap(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    # Notification channels stay bound to the old SIM until re-registered.
    return _transition(
        merchant,
        "SIM_SWAP",
        now,
        sim_status=SimStatus.SWAPPED,
        sim_swap_days_ago=0,
        notifications_enabled=False,
    )


def apply_pin_attempt(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    # A locked PIN refuses further entry, so the counter stops at the lock threshold.
    attempts = min(merchant.pin_attempts + 1, PIN_LOCK_THRESHOLD)
    return _transition(
        merchant,
        "PIN_ATTEMPT",
        now,
        pin_attempts=attempts,
        pin_locked=attempts >= PIN_LOCK_THRESHOLD,
    )


def apply_pin_reset(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(merchant, "PIN_RESET", now, pin_attempts=0, pin_locked=False)


def apply_account_suspend(
    merchant: Merchant, reason: str = "MANUAL", *, now: Optional[datetime] = None
) -> Merchant:
    if not isinstance(reason, str) or not reason.strip():
        raise ValueError("Suspension reason must be a non-empty string")
    return _transition(
        merchant,
        "ACCOUNT_SUSPEND",
        now,
        account_status=AccountStatus.SUSPENDED,
        settlement_on_hold=True,
        suspend_reason=reason.strip(),
    )


def apply_account_reactivate(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(
        merchant,
        "ACCOUNT_REACTIVATE",
        now,
        account_status=AccountStatus.ACTIVE,
        settlement_on_hold=False,
        dormant_days=0,
        operator_dormant_days=0,
        suspend_reason=None,
    )


def apply_account_freeze(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(
        merchant,
        "ACCOUNT_FREEZE",
        now,
        account_status=AccountStatus.FROZEN,
        settlement_on_hold=True,
    )


def apply_kyc_renewal(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(merchant, "KYC_RENEWAL", now, kyc_status=KycStatus.PENDING, kyc_age_days=0)


def apply_kyc_approval(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(merchant, "KYC_APPROVED", now, kyc_status=KycStatus.VERIFIED, kyc_age_days=0)


@dataclass(frozen=True)
class TimeCascade:
    """A threshold rule applied by `advance_days` after counters are aged.

    `applies` receives the pre-transition snapshot and the aged counters.
    """

    name: str
    applies: Callable[[Merchant, Dict[str, Any]], bool]
    changes: Dict[str, Any]


TIME_CASCADES: Tuple[TimeCascade, ...] = (
    TimeCascade(
        name="KYC_EXPIRED",
        applies=lambda m, aged: m.kyc_status == KycStatus.VERIFIED and aged["kyc_age_days"] >= KYC_EXPIRY_DAYS,
        changes={"kyc_status": KycStatus.EXPIRED},
    ),
    TimeCascade(
        name="DORMANCY_SUSPENSION",
        applies=lambda m, aged: m.account_status == AccountStatus.ACTIVE
        and aged["dormant_days"] >= DORMANCY_SUSPEND_DAYS,
        changes={"account_status": AccountStatus.SUSPENDED, "settlement_on_hold": True},
    ),
    TimeCascade(
        name="START_KEY_EXPIRED",
        applies=lambda m, aged: m.start_key_status == StartKeyStatus.VALID
        and aged["dormant_days"] >= START_KEY_EXPIRY_DAYS,
        changes={"start_key_status": StartKeyStatus.EXPIRED},
    ),
)


def advance_days(
    merchant: Merchant,
    days: int = 1,
    *,
    cascades: Tuple[TimeCascade, ...] = TIME_CASCADES,
    now: Optional[datetime] = None,
) -> Merchant:
    """Age every day counter by `days` and apply threshold cascades in one step."""
    days = _require_days(days)
    aged: Dict[str, Any] = {
        "kyc_age_days": merchant.kyc_age_days + days,
        "dormant_days": merchant.dormant_days + days,
        "operator_dormant_days": merchant.operator_dormant_days + days,
        "sim_swap_days_ago": (
            merchant.sim_swap_days_ago + days if merchant.sim_swap_days_ago is not None else None
        ),
    }

    changes = dict(aged)
    triggered = []
    for cascade in cascades:
        if cascade.applies(merchant, aged):
            changes.update(cascade.changes)
            triggered.append(cascade.name)

    updated = _transition(merchant, "TIME_ADVANCE", now, **changes)
    if triggered:
        logger.info(
            "Advancing merchant %s by %d day(s) triggered %s", merchant.id, days, ", ".join(triggered)
        )
    return updated


def apply_transaction(
    merchant: Merchant, amount: Union[Decimal, int, str] = 0, *, now: Optional[datetime] = None
) -> Merchant:
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Transaction amount must be numeric, got {amount!r}") from None
    if not value.is_finite() or value < 0:
        raise ValueError(f"Transaction amount must be a non-negative amount, got {amount!r}")
    return _transition(
        merchant,
        "TRANSACTION",
        now,
        balance=merchant.balance + value,
        dormant_days=0,
        operator_dormant_days=0,
    )


def apply_settlement(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(merchant, "SETTLEMENT", now, balance=Decimal("0"), dormant_days=0)


def apply_start_key_reset(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(merchant, "START_KEY_RESET", now, start_key_status=StartKeyStatus.VALID)


def apply_notification_toggle(merchant: Merchant, *, now: Optional[datetime] = None) -> Merchant:
    return _transition(
        merchant, "NOTIF_TOGGLE", now, notifications_enabled=not merchant.notifications_enabled
    )


TRANSITIONS: Dict[str, Callable[..., Merchant]] = {
    "SIM_SWAP": apply_sim_swap,
    "PIN_ATTEMPT": apply_pin_attempt,
    "PIN_RESET": apply_pin_reset,
    "ACCOUNT_SUSPEND": apply_account_suspend,
    "ACCOUNT_REACTIVATE": apply_account_reactivate,
    "ACCOUNT_FREEZE": apply_account_freeze,
    "KYC_RENEWAL": apply_kyc_renewal,
    "KYC_APPROVED": apply_kyc_approval,
    "TIME_ADVANCE": advance_days,
    "TRANSACTION": apply_transaction,
    "SETTLEMENT": apply_settlement,
    "START_KEY_RESET": apply_start_key_reset,
    "NOTIF_TOGGLE": apply_notification_toggle,
}


def apply_event(merchant: Merchant, name: str, /, **kwargs: Any) -> Merchant:
    """Replay a tagged mutation by name, e.g. ``apply_event(m, "TIME_ADVANCE", days=30)``."""
    try:
        transition = TRANSITIONS[name]
    except KeyError:
        raise KeyError(f"Unknown mutation: {name!r}") from None
    return transition(merchant, **kwargs)
