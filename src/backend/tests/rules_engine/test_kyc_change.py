from merchant_twin.rules_engine.models import RuleStatus, Severity
from merchant_twin.rules_engine.rules.kyc_change import KYC_CHANGE


def test_kyc_change_pass(make_merchant):
    res = KYC_CHANGE().evaluate(make_merchant())
    assert res.status == RuleStatus.PASS
    assert "KYC-12345678" in res.inline


def test_kyc_change_fail_when_frozen(make_merchant):
    res = KYC_CHANGE().evaluate(make_merchant(account_status="frozen", sim_status="swapped", sim_swap_days_ago=1))
    assert res.code == "ACC_FROZEN"
    assert res.severity == Severity.CRITICAL


def test_kyc_change_fail_during_sim_swap_hold(make_merchant):
    res = KYC_CHANGE().evaluate(make_merchant(sim_status="swapped", sim_swap_days_ago=4))
    assert res.code == "SIM_SWAP_KYC_HOLD"
    assert res.severity == Severity.MEDIUM
    assert "10 day(s) remaining" in res.inline


def test_kyc_change_sim_swap_hold_is_fourteen_days(make_merchant):
    res = KYC_CHANGE().evaluate(make_merchant(sim_status="swapped", sim_swap_days_ago=14))
    assert res.status == RuleStatus.PASS


def test_kyc_change_fail_while_review_active(make_merchant):
    res = KYC_CHANGE().evaluate(make_merchant(kyc_status="pending", kyc_age_days=3))
    assert res.code == "KYC_REVIEW_ACTIVE"
    assert res.severity == Severity.MEDIUM
