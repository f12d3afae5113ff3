import pytest

from merchant_twin.rules_engine import scan_all
from merchant_twin.twin.registry import curated_merchant, curated_merchants
from merchant_twin.twin.schema import AccountStatus, KycStatus, StartKeyStatus


def test_curated_fleet_has_five_merchants():
    ids = [m.id for m in curated_merchants()]
    assert ids == ["M001", "M002", "M003", "M004", "M005"]


def test_curated_merchant_lookup():
    assert curated_merchant("M003").kyc_status == KycStatus.PENDING
    with pytest.raises(KeyError):
        curated_merchant("M999")


def test_curated_profiles_cover_each_scenario():
    assert scan_all(curated_merchant("M001")) == []
    assert scan_all(curated_merchant("M005")) == []

    compound = curated_merchant("M002")
    assert compound.account_status == AccountStatus.SUSPENDED
    assert compound.pin_locked
    assert len(scan_all(compound)) == 12

    frozen = curated_merchant("M004")
    assert frozen.account_status == AccountStatus.FROZEN
    assert frozen.start_key_status == StartKeyStatus.EXPIRED

    pending = scan_all(curated_merchant("M003"))
    assert {f.code for f in pending} == {"KYC_PENDING", "KYC_REVIEW_ACTIVE", "KYC_PENDING_APP"}
