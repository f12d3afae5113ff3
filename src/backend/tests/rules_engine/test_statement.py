from merchant_twin.rules_engine.models import RuleStatus, Severity
from merchant_twin.rules_engine.rules.statement import STATEMENT


def test_statement_pass(make_merchant):
    res = STATEMENT().evaluate(make_merchant())
    assert res.status == RuleStatus.PASS
    assert "grace@example.com" in res.inline


def test_statement_fail_when_suspended(make_merchant):
    res = STATEMENT().evaluate(make_merchant(account_status="suspended", notifications_enabled=False))
    assert res.status == RuleStatus.FAIL
    assert res.code == "ACC_SUSPENDED"
    assert res.severity == Severity.MEDIUM


def test_statement_fail_when_frozen(make_merchant):
    res = STATEMENT().evaluate(make_merchant(account_status="frozen"))
    assert res.code == "ACC_FROZEN"
    assert res.severity == Severity.MEDIUM


def test_statement_warns_when_notifications_off(make_merchant):
    res = STATEMENT().evaluate(make_merchant(notifications_enabled=False))
    assert res.status == RuleStatus.WARN
    assert res.success == "warn"
    assert res.code == "NOTIF_OFF"
    assert res.severity == Severity.LOW
    assert res.demand_rank is None
    assert res.escalation == "Chat via My Safaricom App > Help"
