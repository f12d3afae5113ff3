"""Sensor traffic lights and coarse risk tiers.

Independent of the per-action rule catalog: every sensor is bucketed on its
own fixed thresholds, and the tier is derived from the bucket counts.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from .schema import AccountStatus, KycStatus, Merchant, SimStatus, StartKeyStatus


class RiskTier(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    HEALTHY = "HEALTHY"


class SensorHealth(BaseModel):
    green: List[str] = Field(default_factory=list)
    amber: List[str] = Field(default_factory=list)
    red: List[str] = Field(default_factory=list)
    score: Decimal = Decimal("0")

    @property
    def total(self) -> int:
        return len(self.green) + len(self.amber) + len(self.red)


def sensor_health(merchant: Merchant) -> SensorHealth:
    green: List[str] = []
    amber: List[str] = []
    red: List[str] = []

    def bucket(name: str, is_red: bool, is_amber: bool = False) -> None:
        if is_red:
            red.append(name)
        elif is_amber:
            amber.append(name)
        else:
            green.append(name)

    bucket("account_status", merchant.account_status != AccountStatus.ACTIVE)
    bucket(
        "kyc_status",
        merchant.kyc_status == KycStatus.EXPIRED,
        merchant.kyc_status == KycStatus.PENDING,
    )
    bucket("pin_attempts", merchant.pin_locked, merchant.pin_attempts >= 2)
    bucket("start_key_status", merchant.start_key_status != StartKeyStatus.VALID)
    bucket(
        "sim_status",
        merchant.sim_status == SimStatus.UNREGISTERED,
        merchant.sim_status == SimStatus.SWAPPED,
    )
    bucket("dormant_days", merchant.dormant_days >= 60, merchant.dormant_days >= 30)
    bucket("notifications_enabled", False, not merchant.notifications_enabled)
    bucket("settlement_on_hold", merchant.settlement_on_hold)
    bucket(
        "operator_dormant_days",
        merchant.operator_dormant_days >= 90,
        merchant.operator_dormant_days >= 60,
    )

    total = len(green) + len(amber) + len(red)
    score = (Decimal(len(green)) / Decimal(total)).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)
    return SensorHealth(green=green, amber=amber, red=red, score=score)


def risk_tier(merchant: Merchant) -> RiskTier:
    health = sensor_health(merchant)
    if len(health.red) >= 3 or merchant.account_status == AccountStatus.FROZEN:
        return RiskTier.CRITICAL
    if len(health.red) >= 1 or len(health.amber) >= 3:
        return RiskTier.HIGH
    if health.amber:
        return RiskTier.MEDIUM
    return RiskTier.HEALTHY


class ContactPrediction(BaseModel):
    score: int
    tier: str
    factors: List[str] = Field(default_factory=list)


def contact_probability(merchant: Merchant) -> ContactPrediction:
    """Additive likelihood (0-100) that this merchant calls the contact centre soon."""
    score = 0
    factors: List[str] = []

    def add(points: int, label: str) -> None:
        nonlocal score
        score += points
        factors.append(f"{label} (+{points})")

    if merchant.account_status == AccountStatus.SUSPENDED:
        add(30, "Account suspended")
    elif merchant.account_status == AccountStatus.FROZEN:
        add(35, "Account frozen")

    if merchant.kyc_status == KycStatus.EXPIRED:
        add(25, "KYC expired")
    elif merchant.kyc_age_days > 300:
        add(15, f"KYC aging {merchant.kyc_age_days}d")
    elif merchant.kyc_age_days > 240:
        add(8, f"KYC aging {merchant.kyc_age_days}d")

    if merchant.pin_locked:
        add(20, "PIN locked")
    elif merchant.pin_attempts == 2:
        add(12, "2 PIN attempts")

    if merchant.sim_status == SimStatus.SWAPPED:
        days_ago = merchant.sim_swap_days_ago or 0
        if days_ago < 7:
            add(18, f"SIM swap {days_ago}d ago")
        elif days_ago < 30:
            add(10, f"SIM swap {days_ago}d ago")

    if merchant.start_key_status == StartKeyStatus.EXPIRED:
        add(22, "Start key expired")
    elif merchant.start_key_status == StartKeyStatus.INVALID:
        add(18, "Start key invalid")

    if merchant.dormant_days >= 60:
        add(20, f"Dormant {merchant.dormant_days}d")
    elif merchant.dormant_days >= 45:
        add(12, f"Dormant {merchant.dormant_days}d")
    elif merchant.dormant_days >= 30:
        add(6, f"Dormant {merchant.dormant_days}d")

    if not merchant.notifications_enabled:
        add(8, "Notifications off")
    if merchant.settlement_on_hold:
        add(10, "Settlement on hold")
    if merchant.operator_dormant_days >= 60:
        add(10, f"Operator dormant {merchant.operator_dormant_days}d")

    capped = min(score, 100)
    if capped >= 70:
        tier = "VERY HIGH"
    elif capped >= 50:
        tier = "HIGH"
    elif capped >= 30:
        tier = "MEDIUM"
    else:
        tier = "LOW"
    return ContactPrediction(score=capped, tier=tier, factors=factors)
