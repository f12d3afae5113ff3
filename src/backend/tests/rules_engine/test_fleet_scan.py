import random
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from merchant_twin.rules_engine import FleetScanner, scan_batch
from merchant_twin.rules_engine.config import EngineConfig
from merchant_twin.rules_engine.models import BatchResult, Severity
from merchant_twin.twin.generator import generate_batch
from merchant_twin.twin.health import RiskTier, risk_tier
from merchant_twin.twin.registry import curated_merchants


def test_empty_fleet_is_all_zero():
    result = scan_batch([])
    assert isinstance(result, BatchResult)
    assert result.merchant_results == []
    fleet = result.fleet
    assert fleet.total_merchants == 0
    assert fleet.healthy_merchants == 0
    assert fleet.merchants_with_any_failure == 0
    assert fleet.merchants_with_critical == 0
    assert fleet.total_calls_at_risk == 0
    assert fleet.top_failures == []
    assert all(row.fail_rate == 0 and row.risk_score == 0 for row in fleet.action_risk)


def test_curated_fleet_aggregates():
    fleet = scan_batch(curated_merchants()).fleet
    assert fleet.total_merchants == 5
    assert fleet.healthy_merchants + fleet.merchants_with_any_failure == 5
    assert fleet.merchants_with_critical == 2
    assert fleet.merchants_with_critical <= fleet.merchants_with_any_failure


def test_merchant_results_ordered_by_id():
    merchants = list(curated_merchants())
    random.Random(3).shuffle(merchants)
    ids = [scan.merchant.id for scan in scan_batch(merchants).merchant_results]
    assert ids == sorted(ids)


def test_aggregates_independent_of_input_order():
    merchants = generate_batch(40, seed=21)
    shuffled = list(merchants)
    random.Random(5).shuffle(shuffled)
    assert scan_batch(merchants).fleet == scan_batch(list(reversed(merchants))).fleet
    assert scan_batch(merchants).fleet == scan_batch(shuffled).fleet


def test_total_calls_at_risk_is_sum_of_merchants():
    result = scan_batch(generate_batch(30, seed=8))
    assert result.fleet.total_calls_at_risk == sum(s.summary.calls_at_risk for s in result.merchant_results)


def test_top_failures_ordering_and_percentages(make_merchant):
    merchants = [
        make_merchant(id="A", notifications_enabled=False),
        make_merchant(id="B", notifications_enabled=False),
        make_merchant(id="C", pin_attempts=3),
        make_merchant(id="D"),
    ]
    fleet = scan_batch(merchants, top_n=10).fleet
    codes = [(t.code, t.count, t.merchants, t.pct) for t in fleet.top_failures]
    assert codes[:2] == [("NOTIF_DISABLED", 2, 2, 50), ("NOTIF_OFF", 2, 2, 50)]
    assert ("PIN_LOCKED", 2, 1, 25) in codes
    counts = [(-t.count, t.code) for t in fleet.top_failures]
    assert counts == sorted(counts)
    assert fleet.healthy_merchants == 1
    assert fleet.merchants_with_any_failure == 3


def test_top_failures_limited_by_top_n():
    merchants = generate_batch(30, seed=4)
    assert len(scan_batch(merchants, top_n=3).fleet.top_failures) <= 3
    assert scan_batch(merchants, top_n=0).fleet.top_failures == []


def test_top_failures_default_limit_from_config(make_runner):
    scanner = FleetScanner(make_runner(top_failures_limit=2))
    assert len(scanner.scan(generate_batch(30, seed=4)).fleet.top_failures) <= 2


def test_negative_top_n_rejected():
    with pytest.raises(ValueError):
        scan_batch(curated_merchants(), top_n=-1)


def test_pct_rounds_half_up(make_merchant):
    merchants = [make_merchant(id=f"M{i}", pin_attempts=3 if i < 1 else 0) for i in range(8)]
    top = {t.code: t for t in scan_batch(merchants).fleet.top_failures}
    # 1 of 8 merchants is 12.5%.
    assert top["PIN_LOCKED"].pct == 13


def test_action_risk_heatmap(make_merchant):
    merchants = [
        make_merchant(id="A", balance="0"),
        make_merchant(id="B", notifications_enabled=False),
    ]
    rows = scan_batch(merchants).fleet.action_risk
    assert len(rows) == 12
    by_key = {row.action_key: row for row in rows}
    assert by_key["SETTLE_FUNDS"].failing_merchants == 1
    assert by_key["SETTLE_FUNDS"].fail_rate == Decimal("50.00")
    assert by_key["SETTLE_FUNDS"].risk_score == Decimal("50.00")
    # Warnings are not hard failures.
    assert by_key["STATEMENT"].failing_merchants == 0
    assert by_key["NOTIFICATIONS"].risk_score == Decimal("17.72")
    assert [row.action_key for row in rows[:2]] == ["SETTLE_FUNDS", "NOTIFICATIONS"]
    assert [row.demand_rank for row in rows[2:]] == sorted(row.demand_rank for row in rows[2:])


def test_parallel_map_matches_sequential():
    merchants = generate_batch(20, seed=99)
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = scan_batch(merchants, executor=pool)
    assert parallel == scan_batch(merchants)


def test_merchants_with_critical_counts_critical_failures(make_merchant):
    merchants = [make_merchant(id="A", account_status="frozen"), make_merchant(id="B", balance="0")]
    result = scan_batch(merchants)
    assert result.fleet.merchants_with_critical == 1
    criticals = [s for s in result.merchant_results if s.summary.by_severity[Severity.CRITICAL]]
    assert [s.merchant.id for s in criticals] == ["A"]


def test_all_healthy_fleet_has_no_failures(make_merchant):
    merchants = [make_merchant(id=f"T00{i}") for i in range(1, 5)]
    assert all(risk_tier(m) == RiskTier.HEALTHY for m in merchants)

    fleet = scan_batch(merchants).fleet
    assert fleet.total_merchants == 4
    assert fleet.healthy_merchants == 4
    assert fleet.merchants_with_any_failure == 0
    assert fleet.merchants_with_critical == 0
    assert fleet.top_failures == []


def test_scanner_rejects_runner_and_config_together(make_runner):
    with pytest.raises(ValueError):
        FleetScanner(make_runner(), EngineConfig(top_failures_limit=1))


def test_scanner_takes_limit_from_runner_config(make_runner):
    scanner = FleetScanner(make_runner(top_failures_limit=1))
    assert len(scanner.scan(curated_merchants()).fleet.top_failures) == 1
