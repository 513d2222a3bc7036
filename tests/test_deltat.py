# tests/test_deltat.py

import pytest

from sweph.core.time import JD_J2000
from sweph.engines.deltat import (
    DeltaTModel,
    EspenakMeeusDeltaT,
    StandardDeltaT,
    TableDeltaT,
    delta_t,
    delta_t_seconds,
    get_model,
)

JD_1900 = 2415020.0   # 1899-12-31 12h UT, decimal year 1900.0
JD_2100 = JD_J2000 + 36525.0


def test_j2000_values():
    """ΔT at J2000.0 is a little over one minute in both models."""
    assert delta_t_seconds(JD_J2000, DeltaTModel.STANDARD) == pytest.approx(63.8, abs=1e-9)
    assert delta_t_seconds(JD_J2000, DeltaTModel.ESPENAK_MEEUS) == pytest.approx(63.86, abs=1e-9)

def test_days_and_seconds_agree():
    for model in DeltaTModel:
        for jd in (0.0, JD_1900, JD_J2000, JD_2100):
            assert delta_t(jd, model) == pytest.approx(delta_t_seconds(jd, model) / 86400.0, rel=1e-15)

def test_deterministic():
    for model in DeltaTModel:
        for jd in (-1.0e6, 1.0e6, JD_1900, JD_J2000, 2460000.25, 5.0e6):
            assert delta_t(jd, model) == delta_t(jd, model)

def test_standard_table_interpolation():
    m = StandardDeltaT()
    assert m.delta_t_seconds(1900.0) == pytest.approx(-2.8)
    assert m.delta_t_seconds(1901.0) == pytest.approx((-2.8 - 0.1) / 2.0)
    assert m.delta_t_seconds(1620.0) == pytest.approx(121.0)

def test_standard_joins_table_before_1620():
    m = StandardDeltaT()
    assert m.delta_t_seconds(1619.9999) == pytest.approx(121.0, abs=0.01)
    # Outside the blend window: the long-term parabola -20 + 32u^2
    u = (1000.0 - 1820.0) / 100.0
    assert m.delta_t_seconds(1000.0) == pytest.approx(-20.0 + 32.0 * u * u)

def test_standard_extrapolates_table_trend():
    m = StandardDeltaT()
    # Slope over the last decade of the table: (69.2 - 67.3) / 10
    assert m.delta_t_seconds(2034.0) == pytest.approx(69.2 + 1.9, abs=1e-9)
    # Far outside the table: degraded accuracy, but never an error
    assert m.delta_t_seconds(3000.0) > m.delta_t_seconds(2100.0)
    assert delta_t_seconds(5.0e6) == delta_t_seconds(5.0e6)

def test_espenak_meeus_branches():
    m = EspenakMeeusDeltaT()
    assert m.delta_t_seconds(1900.0) == pytest.approx(-2.79)
    assert m.delta_t_seconds(1950.0) == pytest.approx(29.07)
    assert m.delta_t_seconds(1975.0) == pytest.approx(45.45)
    u = (-1000.0 - 1820.0) / 100.0
    assert m.delta_t_seconds(-1000.0) == pytest.approx(-20.0 + 32.0 * u * u)

def test_espenak_meeus_correction_c():
    plain = EspenakMeeusDeltaT()
    corrected = EspenakMeeusDeltaT(apply_correction_c=True)
    assert corrected.delta_t_seconds(1980.0) == plain.delta_t_seconds(1980.0)
    assert corrected.delta_t_seconds(1800.0) == pytest.approx(
        plain.delta_t_seconds(1800.0) - 0.000012932 * 155.0 ** 2
    )

def test_models_differ_but_agree_roughly_in_20th_century():
    for jd in (JD_1900, JD_J2000 - 365.25 * 30):
        a = delta_t_seconds(jd, DeltaTModel.STANDARD)
        b = delta_t_seconds(jd, DeltaTModel.ESPENAK_MEEUS)
        assert a != b
        assert a == pytest.approx(b, abs=2.0)

def test_parse_model_names():
    assert DeltaTModel.parse("standard") is DeltaTModel.STANDARD
    assert DeltaTModel.parse("Espenak_Meeus") is DeltaTModel.ESPENAK_MEEUS
    assert DeltaTModel.parse("alternate") is DeltaTModel.ESPENAK_MEEUS
    assert DeltaTModel.parse(DeltaTModel.STANDARD) is DeltaTModel.STANDARD
    with pytest.raises(ValueError):
        DeltaTModel.parse("bogus")

def test_model_info():
    assert get_model("standard").info()["type"] == "standard"
    assert get_model(DeltaTModel.ESPENAK_MEEUS).info()["type"] == "espenak_meeus_2006"

def test_table_validation():
    with pytest.raises(ValueError):
        TableDeltaT(knots=((2000.0, 1.0), (1990.0, 2.0)))
    with pytest.raises(ValueError):
        TableDeltaT(knots=((2000.0, 1.0),))

def test_table_extrapolation_uses_end_segments():
    t = TableDeltaT(knots=((0.0, 0.0), (10.0, 10.0), (20.0, 30.0)))
    assert t.delta_t_seconds(-5.0) == pytest.approx(-5.0)
    assert t.delta_t_seconds(25.0) == pytest.approx(40.0)
    assert t.delta_t_seconds(15.0) == pytest.approx(20.0)
