"""Sensor predicates shared by the rule definitions."""

from __future__ import annotations

from typing import Callable

from ..twin.schema import AccountStatus, KycStatus, Merchant, SimStatus, StartKeyStatus

Predicate = Callable[[Merchant], bool]


def account_is(status: AccountStatus) -> Predicate:
    return lambda m: m.account_status == status


def account_not_active(m: Merchant) -> bool:
    return m.account_status != AccountStatus.ACTIVE


def kyc_is(status: KycStatus) -> Predicate:
    return lambda m: m.kyc_status == status


def kyc_older_than(days: int) -> Predicate:
    return lambda m: m.kyc_age_days > days


def start_key_is(status: StartKeyStatus) -> Predicate:
    return lambda m: m.start_key_status == status


def pin_locked(m: Merchant) -> bool:
    return m.pin_locked


def pin_not_locked(m: Merchant) -> bool:
    return not m.pin_locked


def sim_swapped(m: Merchant) -> bool:
    return m.sim_status == SimStatus.SWAPPED


def sim_swapped_within(days: int) -> Predicate:
    """True while a SIM swap is younger than `days` (the fraud-prevention hold window)."""
    return lambda m: sim_swapped(m) and m.sim_swap_days_ago is not None and m.sim_swap_days_ago < days


def notifications_off(m: Merchant) -> bool:
    return not m.notifications_enabled


def settlement_held(m: Merchant) -> bool:
    return m.settlement_on_hold


def balance_empty(m: Merchant) -> bool:
    return m.balance <= 0


def dormant_at_least(days: int) -> Predicate:
    return lambda m: m.dormant_days >= days


def operator_dormant_at_least(days: int) -> Predicate:
    return lambda m: m.operator_dormant_days >= days


def fully_operational(m: Merchant) -> bool:
    return m.account_status == AccountStatus.ACTIVE and m.dormant_days < 30 and m.kyc_status == KycStatus.VERIFIED
