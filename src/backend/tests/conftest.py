import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import merchant_twin...` work,
# even when pytest's rootdir is the repository root.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import datetime, timezone

import pytest

from merchant_twin.twin.schema import Merchant


HEALTHY_RECORD = {
    "id": "T001",
    "first_name": "Grace",
    "last_name": "Wanjiku",
    "document_number": "12345678",
    "phone_number": "0712345678",
    "email": "grace@example.com",
    "county": "Nairobi",
    "business_name": "Wanjiku Traders",
    "business_category": "Retail",
    "paybill": "174379",
    "bank": "Equity Bank",
    "bank_account_name": "Wanjiku Traders",
    "account_status": "active",
    "kyc_status": "verified",
    "kyc_age_days": 100,
    "sim_status": "active",
    "sim_swap_days_ago": None,
    "pin_attempts": 0,
    "pin_locked": False,
    "start_key_status": "valid",
    "balance": "5000.00",
    "dormant_days": 2,
    "notifications_enabled": True,
    "settlement_on_hold": False,
    "operator_dormant_days": 3,
}


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def healthy_record() -> dict:
    return dict(HEALTHY_RECORD)


@pytest.fixture
def make_merchant():
    """Build a valid snapshot from healthy defaults plus sensor overrides.

    `pin_locked` follows `pin_attempts` unless given explicitly.
    """

    def _make(**overrides) -> Merchant:
        record = {**HEALTHY_RECORD, **overrides}
        if "pin_attempts" in overrides and "pin_locked" not in overrides:
            record["pin_locked"] = record["pin_attempts"] >= 3
        return Merchant.from_record(record)

    return _make
