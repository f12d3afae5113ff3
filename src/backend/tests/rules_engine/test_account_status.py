from merchant_twin.rules_engine.models import RuleStatus, Severity
from merchant_twin.rules_engine.rules.account_status import ACCOUNT_STATUS


def test_account_status_pass_when_fully_operational(make_merchant):
    res = ACCOUNT_STATUS().evaluate(make_merchant(dormant_days=5))
    assert res.status == RuleStatus.PASS
    assert "5 day(s) ago" in res.inline


def test_account_status_gate_short_circuits_old_kyc(make_merchant):
    # Verified KYC keeps the gate open even past a year.
    res = ACCOUNT_STATUS().evaluate(make_merchant(kyc_age_days=370))
    assert res.status == RuleStatus.PASS


def test_account_status_fail_on_kyc_overdue(make_merchant):
    res = ACCOUNT_STATUS().evaluate(make_merchant(account_status="frozen", kyc_age_days=390))
    assert res.code == "KYC_OVERDUE_365"
    assert res.severity == Severity.CRITICAL
    assert "25 day(s)" in res.inline


def test_account_status_fail_when_fully_dormant(make_merchant):
    res = ACCOUNT_STATUS().evaluate(make_merchant(account_status="suspended", dormant_days=95))
    assert res.code == "FULLY_DORMANT"
    assert res.severity == Severity.CRITICAL
    assert "95 days" in res.inline


def test_account_status_fail_when_dormant_60(make_merchant):
    res = ACCOUNT_STATUS().evaluate(make_merchant(account_status="suspended", dormant_days=60))
    assert res.code == "DORMANT_60"
    assert res.severity == Severity.HIGH


def test_account_status_fail_on_compliance_freeze(make_merchant):
    res = ACCOUNT_STATUS().evaluate(make_merchant(account_status="frozen"))
    assert res.code == "COMPLIANCE_FREEZE"
    assert res.severity == Severity.CRITICAL
    assert "174379" in res.fix


def test_account_status_fail_on_compliance_hold(make_merchant):
    res = ACCOUNT_STATUS().evaluate(make_merchant(account_status="suspended"))
    assert res.code == "COMPLIANCE_HOLD"
    assert res.severity == Severity.HIGH


def test_account_status_review_note_when_active_but_pending(make_merchant):
    res = ACCOUNT_STATUS().evaluate(make_merchant(kyc_status="pending", kyc_age_days=10))
    assert res.status == RuleStatus.PASS
    assert "Account status: ACTIVE" in res.inline
    assert "KYC: PENDING" in res.inline
    assert "Review required" in res.inline
