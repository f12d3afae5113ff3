import random

import pytest

from merchant_twin.errors import InvalidMerchantStateError
from merchant_twin.twin.generator import MerchantGenerator, generate_batch, generate_merchant
from merchant_twin.twin.schema import Merchant


def _stable(merchant: Merchant) -> dict:
    return merchant.model_dump(exclude={"generated_at"})


def test_seed_reproduces_fleet():
    first = [_stable(m) for m in generate_batch(20, seed=42)]
    second = [_stable(m) for m in generate_batch(20, seed=42)]
    assert first == second
    assert first != [_stable(m) for m in generate_batch(20, seed=43)]


def test_generated_merchants_are_valid_and_tagged():
    for merchant in generate_batch(300, seed=7):
        assert merchant.invariant_violations() == []
        assert merchant.generated
        assert merchant.generated_at is not None
        assert merchant.id.startswith("GEN-")


def test_clock_is_injectable(fixed_now):
    merchant = MerchantGenerator(seed=1, clock=lambda: fixed_now).merchant()
    assert merchant.generated_at == fixed_now


def test_overrides_keep_pin_pair_consistent():
    assert generate_merchant({"pin_attempts": 3}, seed=1).pin_locked
    assert not generate_merchant({"pin_attempts": 0}, seed=1).pin_locked


def test_overrides_keep_sim_pair_consistent():
    assert generate_merchant({"sim_status": "swapped"}, seed=3).sim_swap_days_ago is not None
    assert generate_merchant({"sim_status": "active"}, seed=3).sim_swap_days_ago is None


def test_invalid_override_rejected():
    with pytest.raises(InvalidMerchantStateError):
        generate_merchant({"account_status": "closed"}, seed=1)


def test_batch_size_validation():
    assert generate_batch(0, seed=1) == []
    with pytest.raises(ValueError):
        generate_batch(-1)


def test_seed_and_rng_are_exclusive():
    with pytest.raises(ValueError):
        MerchantGenerator(1, rng=random.Random(1))


def test_distribution_covers_every_account_status():
    statuses = {m.account_status.value for m in generate_batch(200, seed=5)}
    assert statuses == {"active", "suspended", "frozen"}
