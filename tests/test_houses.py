import pytest

from conftest import RAW_ASC, RAW_CUSPS, RAW_MC, StubProvider
from natal_tools.angles import normalize
from natal_tools.errors import HouseResolutionError
from natal_tools.houses import equal_cusps, resolve_houses, whole_sign_cusps
from natal_tools.models import CalculationSettings, HouseSystem, ZodiacMode, ZodiacSign

AYANAMSA = 24.0


def settings(system: HouseSystem, zodiac: ZodiacMode = ZodiacMode.TROPICAL) -> CalculationSettings:
    return CalculationSettings(zodiac, system, ayanamsa_year=2024, ayanamsa=AYANAMSA)


def resolve(provider: StubProvider, system: HouseSystem, zodiac: ZodiacMode = ZodiacMode.TROPICAL):
    return resolve_houses(provider, 2448058.0, 55.7558, 37.6176, settings(system, zodiac))


@pytest.mark.parametrize("system", [HouseSystem.KOCH, HouseSystem.PLACIDUS, HouseSystem.REGIOMONTANUS])
def test_direct_cusp_systems_use_provider_cusps_in_order(system):
    result = resolve(StubProvider(), system)
    assert [c.number for c in result.cusps] == list(range(1, 13))
    assert [c.longitude for c in result.cusps] == pytest.approx(list(RAW_CUSPS))


def test_house_code_is_passed_to_provider():
    provider = StubProvider()
    resolve(provider, HouseSystem.PLACIDUS)
    assert provider.house_calls == [(2448058.0, 55.7558, 37.6176, "P")]


def test_direct_cusps_are_projected_in_sidereal_mode():
    result = resolve(StubProvider(), HouseSystem.KOCH, ZodiacMode.SIDEREAL)
    assert [c.longitude for c in result.cusps] == pytest.approx([normalize(c - AYANAMSA) for c in RAW_CUSPS])
    assert result.cusps[6].longitude == pytest.approx(356.0)
    assert result.cusps[6].zodiac_sign is ZodiacSign.PISCES


@pytest.mark.parametrize("ascendant", [0.0, 15.5, 200.0, 345.25, 359.999])
def test_equal_cusps_step_thirty_degrees_from_ascendant(ascendant):
    cusps = equal_cusps(ascendant)
    assert len(cusps) == 12
    assert cusps[0].longitude == ascendant
    for i, cusp in enumerate(cusps, start=1):
        assert cusp.number == i
        assert cusp.longitude == pytest.approx(normalize(ascendant + (i - 1) * 30.0))


def test_equal_system_ignores_raw_cusps():
    provider = StubProvider(cusps=(1.0,) * 12)
    result = resolve(provider, HouseSystem.EQUAL)
    assert result.cusps[0].longitude == RAW_ASC
    assert result.cusps[0].longitude == result.ascendant.longitude
    assert result.cusps[11].longitude == pytest.approx(170.0)


def test_equal_system_starts_at_projected_ascendant_in_sidereal_mode():
    result = resolve(StubProvider(), HouseSystem.EQUAL, ZodiacMode.SIDEREAL)
    assert result.ascendant.longitude == pytest.approx(RAW_ASC - AYANAMSA)
    assert result.cusps[0].longitude == result.ascendant.longitude
    assert result.cusps[1].longitude == pytest.approx(RAW_ASC - AYANAMSA + 30.0)


def test_whole_sign_starts_at_ascendant_sign():
    cusps = whole_sign_cusps(200.0)
    assert [c.longitude for c in cusps] == pytest.approx([(180.0 + 30.0 * i) % 360.0 for i in range(12)])
    assert cusps[0].zodiac_sign is ZodiacSign.LIBRA


def test_angles_are_projected_independently_of_house_system():
    for system in (HouseSystem.KOCH, HouseSystem.EQUAL, HouseSystem.WHOLE_SIGN):
        result = resolve(StubProvider(), system, ZodiacMode.SIDEREAL)
        assert result.ascendant.name == "Ascendant"
        assert result.ascendant.longitude == pytest.approx(normalize(RAW_ASC - AYANAMSA))
        assert result.midheaven.name == "Midheaven"
        assert result.midheaven.longitude == pytest.approx(normalize(RAW_MC - AYANAMSA))
        assert result.midheaven.zodiac_sign is ZodiacSign.GEMINI


def test_provider_failure_is_fatal():
    with pytest.raises(HouseResolutionError, match="house calculation failed"):
        resolve(StubProvider(fail_houses=True), HouseSystem.KOCH)


def test_short_cusp_list_is_fatal():
    with pytest.raises(HouseResolutionError):
        resolve(StubProvider(cusps=RAW_CUSPS[:11]), HouseSystem.KOCH)


def test_missing_midheaven_is_fatal():
    with pytest.raises(HouseResolutionError):
        resolve(StubProvider(angles=(RAW_ASC,)), HouseSystem.EQUAL)
