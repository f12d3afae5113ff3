import pytest

from merchant_twin.rules_engine import scan_all, summarize
from merchant_twin.rules_engine.models import RuleStatus, Severity, SeverityOrdering
from merchant_twin.twin.generator import generate_batch
from merchant_twin.twin.registry import curated_merchant, curated_merchants


def test_healthy_merchant_has_no_failures(make_merchant):
    merchant = make_merchant()
    assert scan_all(merchant) == []
    summary = summarize(merchant)
    assert summary.total == 12
    assert summary.passing == 12
    assert summary.failing == 0
    assert summary.calls_at_risk == 0
    assert summary.by_severity == {s: 0 for s in Severity}


@pytest.mark.parametrize("merchant", curated_merchants() + tuple(generate_batch(25, seed=11)), ids=lambda m: m.id)
def test_scan_and_summary_agree(merchant):
    failures = scan_all(merchant)
    summary = summarize(merchant)
    assert len(failures) + summary.passing == 12
    assert summary.non_passing == len(failures)
    assert summary.failing == sum(1 for f in failures if f.status == RuleStatus.FAIL)
    assert summary.warnings == sum(1 for f in failures if f.status == RuleStatus.WARN)
    assert summary.calls_at_risk == sum(f.demand_total for f in failures)
    assert sum(summary.by_severity.values()) == len(failures)


@pytest.mark.parametrize("merchant", curated_merchants() + tuple(generate_batch(25, seed=12)), ids=lambda m: m.id)
def test_failures_sorted_by_severity_then_demand(merchant):
    ordering = SeverityOrdering.default()
    keys = [(-ordering.rank(f.severity), -f.demand_total, f.demand_rank) for f in scan_all(merchant)]
    assert keys == sorted(keys)


def test_failures_carry_action_metadata():
    failures = scan_all(curated_merchant("M002"))
    settle = next(f for f in failures if f.action_key == "SETTLE_FUNDS")
    assert settle.action_label == "Withdraw / Settle Funds"
    assert settle.demand_rank == 1
    assert settle.demand_total == 14144
    assert settle.ussd_path == "*234# → 1 → 1"


def test_compound_failure_merchant_ordering():
    failures = scan_all(curated_merchant("M002"))
    assert failures[0].severity == Severity.CRITICAL
    assert failures[0].action_key == "SETTLE_FUNDS"
    assert failures[-1].severity == Severity.LOW


def test_warnings_count_toward_calls_at_risk(make_merchant):
    merchant = make_merchant(notifications_enabled=False)
    failures = scan_all(merchant)
    assert {f.code for f in failures} == {"NOTIF_OFF", "NOTIF_DISABLED"}
    summary = summarize(merchant)
    assert summary.failing == 1
    assert summary.warnings == 1
    assert summary.by_severity[Severity.LOW] == 2
    assert summary.calls_at_risk == 8330 + 5013


def test_runner_scan_returns_both_views(runner):
    merchant = curated_merchant("M003")
    scan = runner.scan(merchant)
    assert scan.merchant == merchant
    assert scan.summary == runner.summarize(merchant)
    assert scan.failures == runner.scan_all(merchant)
