from datetime import date

import pytest

from dwmlgen.ndfd import NdfdElement
from dwmlgen.summary import (
    PeriodForecast,
    PeriodSpan,
    PeriodWindow,
    SkyTrend,
    analyze_sky,
    attribution_instant,
    build_period_windows,
    cold_season,
    compose_instant,
    compose_period,
    icon_filename,
    sky_category,
    spread_pop,
)
from dwmlgen.util import HOUR, LocalClock, parse_timestamp as ts

DAY_SPAN = PeriodSpan(ts("2006-04-15T10:00:00Z"), ts("2006-04-15T22:00:00Z"), True)
NIGHT_SPAN = PeriodSpan(ts("2006-04-15T22:00:00Z"), ts("2006-04-16T10:00:00Z"), False)
NOON = ts("2006-04-15T16:00:00Z")


def _sky_window(values, is_day=True) -> PeriodWindow:
    window = PeriodWindow(start=0, end=12 * HOUR, is_day=is_day)
    for index, value in enumerate(values):
        window.add_sky(value, index)
    return window


def test_attribution_pulls_values_back_half_a_period(clock: LocalClock) -> None:
    valid = ts("2006-04-15T21:00:00Z")
    assert attribution_instant(NdfdElement.TEMP, valid, 3, clock) == valid - 90 * 60
    assert attribution_instant(NdfdElement.POP12, valid, 12, clock) == valid - 6 * HOUR
    maxt = attribution_instant(NdfdElement.MAX_T, ts("2006-04-16T00:00:00Z"), 24, clock)
    assert clock.isoformat(maxt) == "2006-04-15T08:00:00-04:00"


def test_spread_pop_uses_the_trailing_twelve_hours(series) -> None:
    pop = series(NdfdElement.POP12, "2006-04-16T00:00:00Z", 2, 12, [40, None])
    inside = series(NdfdElement.WEATHER, "2006-04-15T15:00:00Z", 3, 12, "")
    assert spread_pop(inside, pop) == [40, -1, -1]
    # The window is open at its start and closed at the PoP valid-time.
    edges = series(NdfdElement.WEATHER, "2006-04-15T12:00:00Z", 2, 12, "")
    assert spread_pop(edges, pop) == [-1, 40]


def test_period_windows_accumulate_each_element(series, clock: LocalClock) -> None:
    first = "2006-04-15T12:00:00Z"
    rows = {
        NdfdElement.SKY: series(NdfdElement.SKY, first, 8, 3, [10, 20, 30, 40, 90, 80, 70, 60]),
        NdfdElement.TEMP: series(NdfdElement.TEMP, first, 8, 3, [50, 60, 70, 65, 55, 50, 48, 47]),
        NdfdElement.WIND_SPEED: series(NdfdElement.WIND_SPEED, first, 8, 3, [5, 12, 8, 3, 14, 10, 5, 5]),
        NdfdElement.WIND_DIR: series(NdfdElement.WIND_DIR, first, 8, 3, [100, 200, 300, 10, 350, 0, 0, 0]),
        NdfdElement.POP12: series(NdfdElement.POP12, "2006-04-16T00:00:00Z", 2, 12, [30, 70]),
        NdfdElement.WEATHER: series(
            NdfdElement.WEATHER,
            first,
            8,
            3,
            ["", "Chc:R:-:<NoVis>:", "Lkly:R:-:<NoVis>:", ""] + ["Patchy:F:<NoInten>:<NoVis>:"] * 3 + [""],
        ),
    }
    periods = {NdfdElement.POP12: 12}
    day, night = build_period_windows([DAY_SPAN, NIGHT_SPAN], rows, periods, clock)

    assert (day.avg_sky, day.min_sky, day.max_sky) == (25, 10, 40)
    assert (day.start_index, day.end_index, day.min_sky_index, day.max_sky_index) == (0, 3, 0, 3)
    assert (night.avg_sky, night.max_sky_index, night.min_sky_index) == (75, 4, 7)
    assert (day.max_temp, night.max_temp) == (70, 55)
    assert (day.max_wind_speed, day.max_wind_direction) == (12, 200)
    assert (night.max_wind_speed, night.max_wind_direction) == (14, 350)
    assert (day.max_daily_pop, night.max_daily_pop) == (30, 70)
    assert day.fog_fraction == 0
    assert night.fog_fraction == pytest.approx(0.75)

    assert compose_period(day) == PeriodForecast("Rain Likely", "ra30.jpg", True)
    assert compose_period(night) == PeriodForecast("Fog", "nfg.jpg")


def test_missing_values_never_contribute(series, clock: LocalClock) -> None:
    rows = {
        NdfdElement.SKY: series(NdfdElement.SKY, "2006-04-15T12:00:00Z", 3, 3, [None, 50, None]),
        NdfdElement.MAX_T: series(NdfdElement.MAX_T, "2006-04-16T00:00:00Z", 1, 24, 72),
    }
    (day,) = build_period_windows([DAY_SPAN], rows, {}, clock)
    assert (day.avg_sky, day.start_index) == (50, 1)
    # No Temp rows: the day's MaxT stands in.
    assert day.max_temp == 72


def test_sky_categories() -> None:
    assert [sky_category(value) for value in (0, 15, 16, 39, 40, 69, 70, 90, 91)] == [0, 0, 1, 1, 2, 2, 3, 3, 4]


@pytest.mark.parametrize(
    "values, is_day, phrase, icon, trend",
    [
        ([10, 10], False, "Clear", "nskc", SkyTrend.STEADY),
        ([50, 60], True, "Partly Sunny", "sct", SkyTrend.STEADY),
        ([10, 10, 10, 10, 10, 80], True, "Increasing Clouds", "few", SkyTrend.INCREASING),
        ([10, 10, 10, 10, 10, 95], True, "Becoming Cloudy", "ovc", SkyTrend.INCREASING),
        ([10, 95, 95], True, "Becoming Cloudy", "ovc", SkyTrend.INCREASING),
        ([95, 5], True, "Clearing", "skc", SkyTrend.CLEARING),
        ([95, 95, 95, 95, 95, 5], True, "Gradual Clearing", "skc", SkyTrend.CLEARING),
        ([60, 60, 60, 60, 60, 10], True, "Decreasing Clouds", "sct", SkyTrend.DECREASING),
        ([50, 10], True, "Becoming Sunny", "skc", SkyTrend.DECREASING),
        ([50, 10], False, "Clear", "nskc", SkyTrend.DECREASING),
    ],
)
def test_sky_phrases(values, is_day, phrase, icon, trend) -> None:
    result = analyze_sky(_sky_window(values, is_day))
    assert (result.phrase, result.icon, result.trend) == (phrase, icon, trend)


def test_sky_trends_only_within_horizon() -> None:
    assert analyze_sky(_sky_window([10, 95]), within_horizon=False).phrase == "Partly Sunny"
    assert analyze_sky(_sky_window([])) is None


def test_icon_filenames() -> None:
    assert icon_filename("ra", 63) == "ra60.jpg"
    assert icon_filename("ra", 100) == "ra100.jpg"
    assert icon_filename("ra", 4) == "ra.jpg"
    assert icon_filename("ra", None) == "ra.jpg"
    assert PeriodForecast("Fog", "fg.jpg").icon_url("http://example.test/icons/") == "http://example.test/icons/fg.jpg"
    assert PeriodForecast().icon_url() is None


@pytest.mark.parametrize(
    "weather, pop, is_day, phrase, icon",
    [
        ("Lkly:R:-:<NoVis>:^Chc:S:-:<NoVis>:", 60, True, "Rain/Snow Likely", "rasn60.jpg"),
        ("Lkly:R:-:<NoVis>:^Chc:S:-:<NoVis>:", 60, False, "Rain/Snow Likely", "nrasn60.jpg"),
        ("Chc:ZR:-:<NoVis>:^Chc:S:-:<NoVis>:", 40, True, "Chance Wintry Mix", "mix40.jpg"),
        ("Chc:R:-:<NoVis>:^Chc:IP:-:<NoVis>:", 40, True, "Chance Rain/Sleet", "raip40.jpg"),
        ("Sct:T:<NoInten>:<NoVis>:", 10, True, "Thunderstorms", "scttsra10.jpg"),
        ("Chc:T:<NoInten>:<NoVis>:^Chc:RW:-:<NoVis>:", 50, True, "Chance Showers and Thunderstorms", "scttsra50.jpg"),
        ("Chc:R:-:<NoVis>:", None, True, "Chance Rain", "ra.jpg"),
        ("Chc:R:-:<NoVis>:", -1, True, "Chance Rain", "ra.jpg"),
        ("Def:S:m:<NoVis>:", 90, False, "Snow", "nsn90.jpg"),
    ],
)
def test_precipitation_phrases(weather, pop, is_day, phrase, icon) -> None:
    forecast = compose_instant(NOON, is_day=is_day, weather=weather, pop=pop)
    assert forecast == PeriodForecast(phrase, icon, True)


def test_showers_use_covered_icon_under_thick_cloud() -> None:
    covered = compose_instant(NOON, is_day=True, weather="Chc:RW:-:<NoVis>:", pop=40, sky=80)
    broken = compose_instant(NOON, is_day=True, weather="Chc:RW:-:<NoVis>:", pop=40, sky=30)
    assert (covered.phrase, covered.icon) == ("Chance Showers", "shra40.jpg")
    assert broken.icon == "hi_shwrs40.jpg"


def test_low_pop_falls_through_to_sky() -> None:
    forecast = compose_instant(NOON, is_day=True, weather="Chc:RW:-:<NoVis>:", pop=10, sky=20)
    assert forecast == PeriodForecast("Mostly Sunny", "few.jpg")


def test_fog_and_obscurations() -> None:
    assert compose_instant(NOON, is_day=True, weather="Areas:F:<NoInten>:<NoVis>:") == PeriodForecast("Fog", "fg.jpg")
    assert compose_instant(NOON, is_day=False, weather="Areas:F:<NoInten>:<NoVis>:").icon == "nfg.jpg"
    haze = compose_instant(NOON, is_day=True, weather="Areas:H:<NoInten>:<NoVis>:", sky=10)
    assert haze == PeriodForecast("Areas Of Haze", "hz.jpg")

    window = PeriodWindow(start=0, end=12 * HOUR, is_day=True)
    for text in ("Patchy:F:<NoInten>:<NoVis>:", "", ""):
        window.add_weather(text)
    assert compose_period(window) == PeriodForecast("Patchy Fog", "fg.jpg")


def test_temperature_and_wind_extremes(clock: LocalClock) -> None:
    assert compose_instant(NOON, is_day=True, weather=None, sky=10, temp=100) == PeriodForecast("Hot", "hot.jpg")
    assert compose_instant(NOON, is_day=True, weather=None, sky=10, temp=20) == PeriodForecast("Cold", "cold.jpg")
    assert compose_instant(NOON, is_day=False, weather=None, sky=10, temp=100).phrase == "Clear"
    assert compose_instant(NOON, is_day=True, weather=None, sky=10, wind_speed=30) == PeriodForecast("Windy", "wind.jpg")
    assert compose_instant(NOON, is_day=False, weather=None, sky=10, wind_speed=30).icon == "nwind.jpg"
    assert compose_instant(NOON, is_day=True, weather=None, sky=10, temp=60, wind_speed=20).phrase == "Breezy"

    january = ts("2006-01-15T17:00:00Z")
    season = cold_season(january, clock)
    blustery = compose_instant(
        january, is_day=True, weather=None, sky=10, temp=20, wind_speed=20, wind_direction=350, season=season
    )
    assert blustery == PeriodForecast("Blustery", "wind.jpg")
    southerly = compose_instant(
        january, is_day=True, weather=None, sky=10, temp=20, wind_speed=20, wind_direction=180, season=season
    )
    assert southerly.phrase == "Breezy"


def test_extremes_override_precipitation() -> None:
    windy = compose_instant(NOON, is_day=True, weather="Lkly:R:-:<NoVis>:", pop=60, sky=90, temp=70, wind_speed=27)
    assert windy == PeriodForecast("Windy", "wind.jpg")
    hot = compose_instant(NOON, is_day=True, weather="Def:R:m:<NoVis>:", pop=80, temp=100)
    assert hot == PeriodForecast("Hot", "hot.jpg")
    calm = compose_instant(NOON, is_day=True, weather="Def:R:m:<NoVis>:", pop=80, temp=70, wind_speed=5)
    assert calm == PeriodForecast("Rain", "ra80.jpg", True)


def test_cold_season_bounds(clock: LocalClock) -> None:
    assert cold_season(ts("2006-01-15T12:00:00Z"), clock) == (
        clock.wall_clock(date(2005, 10, 1), 0),
        clock.wall_clock(date(2006, 4, 1), 0),
    )
    start, end = cold_season(ts("2006-11-01T12:00:00Z"), clock)
    assert (start, end) == (clock.wall_clock(date(2006, 10, 1), 0), clock.wall_clock(date(2007, 4, 1), 0))
