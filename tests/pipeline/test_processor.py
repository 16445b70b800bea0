import numpy as np
import pytest

pytestmark = pytest.mark.pipeline

from lakestrat.contracts import ContractViolation, DomainError
from lakestrat.pipeline.processor import MISSING, UNSTRATIFIED, ProfileProcessor


DEPTHS = np.array([0.0, 2.0, 4.0])


def first_value(temps, depths, *extras):
    return float(temps[0])


def test_defined_row(internal_config):
    proc = ProfileProcessor(internal_config, first_value)
    outcome = proc.process("t0", [20.0, 15.0, 10.0], DEPTHS)

    assert outcome.defined
    assert outcome.value == 20.0


def test_nan_temperature_marks_missing(internal_config):
    proc = ProfileProcessor(internal_config, first_value)
    outcome = proc.process("t0", [20.0, np.nan, 10.0], DEPTHS)

    assert not outcome.defined
    assert outcome.error == MISSING


def test_drop_missing_depths(make_config):
    seen = {}

    def record(temps, depths):
        seen["depths"] = depths
        return len(temps)

    proc = ProfileProcessor(make_config(drop_missing_depths=True), record)
    outcome = proc.process("t0", [20.0, np.nan, 10.0], DEPTHS)

    assert outcome.value == 2
    np.testing.assert_array_equal(seen["depths"], [0.0, 4.0])


def test_drop_missing_depths_needs_two_points(make_config):
    proc = ProfileProcessor(make_config(drop_missing_depths=True), first_value)
    outcome = proc.process("t0", [np.nan, np.nan, 10.0], DEPTHS)

    assert outcome.error == MISSING


def test_nan_extra_marks_missing(internal_config):
    proc = ProfileProcessor(internal_config, first_value)
    outcome = proc.process("t0", [20.0, 15.0, 10.0], DEPTHS, (np.nan,))

    assert outcome.error == MISSING


def test_nan_result_is_tagged(internal_config):
    def no_layer(temps, depths):
        return (np.nan, np.nan)

    proc = ProfileProcessor(internal_config, no_layer, nan_error=UNSTRATIFIED)
    outcome = proc.process("t0", [10.0, 10.0, 10.0], DEPTHS)

    assert not outcome.defined
    assert outcome.error == "unstratified"


def test_nan_result_stays_defined_by_default(internal_config):
    def no_layer(temps, depths):
        return np.nan

    outcome = ProfileProcessor(internal_config, no_layer).process("t0", [10.0, 10.0, 10.0], DEPTHS)

    assert outcome.defined
    assert np.isnan(outcome.value)


def test_partial_nan_result_is_defined(internal_config):
    def half(temps, depths):
        return (1.0, np.nan)

    proc = ProfileProcessor(internal_config, half, nan_error=UNSTRATIFIED)

    assert proc.process("t0", [1.0, 2.0, 3.0], DEPTHS).defined


def test_nan_result_ignores_fail_fast(make_config):
    config = make_config(timeseries={"failure_policy": "fail_fast"})
    proc = ProfileProcessor(config, lambda temps, depths: np.nan, nan_error=UNSTRATIFIED)

    assert proc.process("t0", [1.0, 2.0, 3.0], DEPTHS).error == UNSTRATIFIED


def test_analysis_error_marks_row(internal_config):
    def boom(temps, depths):
        raise DomainError("bad wind")

    outcome = ProfileProcessor(internal_config, boom).process("t0", [1.0, 2.0, 3.0], DEPTHS)

    assert outcome.value is None
    assert outcome.error == "DomainError"


def test_fail_fast_reraises(make_config):
    def boom(temps, depths):
        raise DomainError("bad wind")

    config = make_config(timeseries={"failure_policy": "FAIL_FAST"})
    proc = ProfileProcessor(config, boom)

    with pytest.raises(DomainError):
        proc.process("t0", [1.0, 2.0, 3.0], DEPTHS)


def test_contract_violation_always_propagates(internal_config):
    def bug(temps, depths):
        raise ContractViolation("broken invariant")

    with pytest.raises(ContractViolation):
        ProfileProcessor(internal_config, bug).process("t0", [1.0, 2.0, 3.0], DEPTHS)


def test_unrelated_exceptions_propagate(internal_config):
    def typo(temps, depths):
        raise KeyError("oops")

    with pytest.raises(KeyError):
        ProfileProcessor(internal_config, typo).process("t0", [1.0, 2.0, 3.0], DEPTHS)
