"""Merchant twin state: schema, curated registry, generator, transitions, health."""

from .generator import MerchantGenerator, generate_batch, generate_merchant
from .health import ContactPrediction, RiskTier, SensorHealth, contact_probability, risk_tier, sensor_health
from .mutations import (
    TIME_CASCADES,
    TRANSITIONS,
    advance_days,
    apply_account_freeze,
    apply_account_reactivate,
    apply_account_suspend,
    apply_event,
    apply_kyc_approval,
    apply_kyc_renewal,
    apply_notification_toggle,
    apply_pin_attempt,
    apply_pin_reset,
    apply_settlement,
    apply_sim_swap,
    apply_start_key_reset,
    apply_transaction,
)
from .registry import curated_merchant, curated_merchants
from .schema import (
    MERCHANT_SCHEMA,
    SENSOR_FIELDS,
    AccountStatus,
    KycStatus,
    Merchant,
    SimStatus,
    StartKeyStatus,
    ensure_valid,
    format_kes,
)
