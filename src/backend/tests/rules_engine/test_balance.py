from merchant_twin.rules_engine.models import RuleStatus, Severity
from merchant_twin.rules_engine.rules.balance import BALANCE


def test_balance_pass_shows_formatted_balance(make_merchant):
    res = BALANCE().evaluate(make_merchant(balance="87450.5"))
    assert res.status == RuleStatus.PASS
    assert "KES 87,450.50" in res.inline
    assert "174379" in res.inline


def test_balance_pass_for_suspended_account(make_merchant):
    res = BALANCE().evaluate(make_merchant(account_status="suspended"))
    assert res.status == RuleStatus.PASS


def test_balance_fail_when_frozen(make_merchant):
    res = BALANCE().evaluate(make_merchant(account_status="frozen", pin_attempts=3))
    assert res.code == "ACC_FROZEN_BAL"
    assert res.severity == Severity.MEDIUM


def test_balance_fail_when_pin_locked(make_merchant):
    res = BALANCE().evaluate(make_merchant(pin_attempts=3))
    assert res.code == "PIN_LOCKED_BAL"
    assert res.severity == Severity.HIGH
