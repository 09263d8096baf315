import math

import pytest

from boxopt.criteria import StopCriteria, is_set


def test_defaults_are_unconstrained():
    cr = StopCriteria()
    assert math.isnan(cr.abs_score_diff)
    assert math.isnan(cr.rel_score_diff)
    assert math.isnan(cr.stop_score)
    assert cr.max_iterations == 0
    assert cr.stop_condition() is False


def test_setters_chain_on_same_instance():
    cr = StopCriteria()
    out = (
        cr.set_abs_score_diff(1e-6)
        .set_rel_score_diff(1e-4)
        .set_stop_score(-1.0)
        .set_max_iterations(100)
        .set_stop_condition(lambda: True)
    )
    assert out is cr
    assert cr.abs_score_diff == 1e-6
    assert cr.rel_score_diff == 1e-4
    assert cr.stop_score == -1.0
    assert cr.max_iterations == 100
    assert cr.stop_condition() is True


def test_constructor_keywords_match_setters():
    cr = StopCriteria(abs_score_diff=1e-3, max_iterations=7)
    assert cr.abs_score_diff == 1e-3
    assert cr.max_iterations == 7
    assert is_set(cr.abs_score_diff)
    assert not is_set(cr.rel_score_diff)


def test_stop_condition_is_polled_each_call():
    calls = []

    def after_three() -> bool:
        calls.append(1)
        return len(calls) >= 3

    cr = StopCriteria().set_stop_condition(after_three)
    assert [cr.stop_condition() for _ in range(4)] == [False, False, True, True]


def test_negative_max_iterations_rejected():
    with pytest.raises(ValueError, match="non-negative"):
        StopCriteria().set_max_iterations(-1)


def test_non_callable_stop_condition_rejected():
    with pytest.raises(TypeError, match="callable"):
        StopCriteria().set_stop_condition(True)


def test_copy_is_independent_but_shares_predicate():
    flag = {"stop": False}
    cr = StopCriteria(max_iterations=10, stop_condition=lambda: flag["stop"])
    dup = cr.copy()
    dup.set_max_iterations(20)
    assert cr.max_iterations == 10
    flag["stop"] = True
    assert dup.stop_condition() is True
