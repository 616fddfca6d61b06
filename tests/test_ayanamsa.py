import logging

import pytest

from natal_tools.ayanamsa import ayanamsa, ayanamsa_advisory


def test_reference_epoch_is_zero():
    assert ayanamsa(285) == 0.0


def test_year_2000_value():
    assert ayanamsa(2000) == pytest.approx((2000 - 285) * 50.29 / 3600)
    assert ayanamsa(2000) == pytest.approx(23.96, abs=0.01)


def test_strictly_increasing_over_model_range():
    values = [ayanamsa(year) for year in range(285, 3001, 5)]
    assert all(b > a for a, b in zip(values, values[1:]))


def test_years_before_epoch_wrap_into_range():
    value = ayanamsa(0)
    assert 0.0 <= value < 360.0
    assert value == pytest.approx(360.0 - 285 * 50.29 / 3600)


def test_extreme_years_log_advisory_but_still_compute(caplog):
    with caplog.at_level(logging.WARNING, logger="natal_tools.ayanamsa"):
        ancient = ayanamsa(-2500)
        future = ayanamsa(3500)
    assert 0.0 <= ancient < 360.0
    assert future == pytest.approx((3500 - 285) * 50.29 / 3600)
    messages = [r.getMessage() for r in caplog.records]
    assert any("Ancient year -2500" in m for m in messages)
    assert any("Future year 3500" in m for m in messages)


def test_normal_years_have_no_advisory(caplog):
    with caplog.at_level(logging.WARNING, logger="natal_tools.ayanamsa"):
        ayanamsa(2024)
    assert caplog.records == []
    assert ayanamsa_advisory(-2000) is None
    assert ayanamsa_advisory(3000) is None
    assert ayanamsa_advisory(3001) is not None
