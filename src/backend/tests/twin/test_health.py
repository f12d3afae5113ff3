from decimal import Decimal

import pytest

from merchant_twin.rules_engine import scan_all
from merchant_twin.rules_engine.models import RuleStatus, Severity
from merchant_twin.twin.generator import generate_batch
from merchant_twin.twin.health import RiskTier, contact_probability, risk_tier, sensor_health
from merchant_twin.twin.registry import curated_merchant


def test_healthy_merchant_is_all_green(make_merchant):
    health = sensor_health(make_merchant())
    assert health.red == []
    assert health.amber == []
    assert health.total == 9
    assert health.score == Decimal("1.0000")
    assert risk_tier(make_merchant()) == RiskTier.HEALTHY


def test_sensor_thresholds(make_merchant):
    health = sensor_health(
        make_merchant(
            kyc_status="pending",
            kyc_age_days=5,
            pin_attempts=2,
            sim_status="swapped",
            sim_swap_days_ago=3,
            dormant_days=30,
            notifications_enabled=False,
            operator_dormant_days=60,
        )
    )
    assert health.red == []
    assert health.amber == [
        "kyc_status",
        "pin_attempts",
        "sim_status",
        "dormant_days",
        "notifications_enabled",
        "operator_dormant_days",
    ]
    assert health.score == Decimal("0.3333")


def test_red_sensors(make_merchant):
    health = sensor_health(
        make_merchant(
            account_status="suspended",
            pin_attempts=3,
            start_key_status="invalid",
            sim_status="unregistered",
            dormant_days=60,
            settlement_on_hold=True,
            operator_dormant_days=90,
        )
    )
    assert set(health.red) == {
        "account_status",
        "pin_attempts",
        "start_key_status",
        "sim_status",
        "dormant_days",
        "settlement_on_hold",
        "operator_dormant_days",
    }


@pytest.mark.parametrize(
    "overrides, tier",
    [
        ({"account_status": "frozen"}, RiskTier.CRITICAL),
        ({"settlement_on_hold": True, "pin_attempts": 3, "start_key_status": "expired"}, RiskTier.CRITICAL),
        ({"settlement_on_hold": True}, RiskTier.HIGH),
        ({"pin_attempts": 2, "notifications_enabled": False, "dormant_days": 31}, RiskTier.HIGH),
        ({"pin_attempts": 2}, RiskTier.MEDIUM),
        ({}, RiskTier.HEALTHY),
    ],
)
def test_risk_tier(make_merchant, overrides, tier):
    assert risk_tier(make_merchant(**overrides)) == tier


def test_curated_tiers():
    assert risk_tier(curated_merchant("M001")) == RiskTier.HEALTHY
    assert risk_tier(curated_merchant("M002")) == RiskTier.CRITICAL
    assert risk_tier(curated_merchant("M003")) == RiskTier.MEDIUM
    assert risk_tier(curated_merchant("M004")) == RiskTier.CRITICAL


@pytest.mark.parametrize("merchant", generate_batch(200, seed=2024), ids=lambda m: m.id)
def test_critical_rule_failure_is_never_healthy(merchant):
    critical = [f for f in scan_all(merchant) if f.status == RuleStatus.FAIL and f.severity == Severity.CRITICAL]
    if critical:
        assert risk_tier(merchant) != RiskTier.HEALTHY


def test_contact_probability_caps_at_100():
    prediction = contact_probability(curated_merchant("M002"))
    assert prediction.score == 100
    assert prediction.tier == "VERY HIGH"
    assert "Account suspended (+30)" in prediction.factors


def test_contact_probability_low_for_healthy(make_merchant):
    prediction = contact_probability(make_merchant())
    assert prediction.score == 0
    assert prediction.tier == "LOW"
    assert prediction.factors == []


def test_contact_probability_is_additive(make_merchant):
    prediction = contact_probability(make_merchant(pin_attempts=2, notifications_enabled=False, kyc_age_days=250))
    assert prediction.score == 12 + 8 + 8
    assert prediction.tier == "LOW"


def test_frozen_expired_locked_and_held_merchant(make_merchant):
    merchant = make_merchant(
        account_status="frozen",
        kyc_status="expired",
        kyc_age_days=400,
        pin_attempts=3,
        settlement_on_hold=True,
    )
    failures = {f.action_key: f for f in scan_all(merchant)}

    assert failures["SETTLE_FUNDS"].code == "ACC_FROZEN"
    assert failures["SETTLE_FUNDS"].severity == Severity.CRITICAL
    assert failures["ACCOUNT_STATUS"].code == "KYC_OVERDUE_365"
    assert failures["ACCOUNT_STATUS"].severity in (Severity.CRITICAL, Severity.HIGH)
    assert risk_tier(merchant) == RiskTier.CRITICAL
