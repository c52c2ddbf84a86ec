from dwmlgen.weather import (
    Coverage,
    Intensity,
    WxType,
    dominant_group,
    parse_group,
    parse_weather,
    select_period_weather,
    translate_hazard,
)
from dwmlgen.weather.ugly import MAX_GROUPS, MAX_QUALIFIERS


def test_parse_group_fields() -> None:
    group = parse_group("Sct:T:+:1/4SM:DmgW,LgA")
    assert group.coverage is Coverage.SCATTERED
    assert group.wx_type is WxType.THUNDERSTORMS
    assert group.intensity is Intensity.HEAVY
    assert group.visibility == "1/4"
    assert group.qualifiers == ("DmgW", "LgA")
    assert group.qualifier_text == "damaging winds,large hail"


def test_parse_group_pads_missing_fields() -> None:
    group = parse_group("Chc:R")
    assert group.coverage is Coverage.CHANCE
    assert group.intensity is Intensity.NONE
    assert group.visibility is None
    assert group.qualifier_text == "none"


def test_or_qualifier_marks_additive_group() -> None:
    expression = parse_weather("Chc:R:-:<NoVis>:^Chc:S:-:<NoVis>:OR")
    assert not expression.groups[0].additive_or
    assert expression.groups[1].additive_or
    assert expression.groups[1].qualifiers == ()
    assert expression.english() == "chance light rain or chance light snow"


def test_english_rendition_joins_groups() -> None:
    expression = parse_weather("Sct:RW:-:<NoVis>:^Iso:T:m:<NoVis>:^Patchy:F:+:1/4SM:")
    assert expression.english() == (
        "scattered light rain showers, isolated moderate thunderstorms and patchy heavy fog"
    )
    assert parse_weather("Lkly:R:-:<NoVis>:^Chc:S:-:<NoVis>:").english() == "likely light rain and chance light snow"


def test_empty_and_malformed_strings_degrade_to_no_weather() -> None:
    assert parse_weather("<NoCov>:<NoWx>:<NoInten>:<NoVis>:").english() == "No Weather"
    assert parse_weather("").english() == "No Weather"
    assert parse_weather(None).english() == "No Weather"
    assert len(parse_weather("garbage")) == 0
    assert len(parse_weather("Chc:XX:-")) == 0


def test_group_and_qualifier_limits() -> None:
    ugly = "^".join(["Chc:R:-:<NoVis>:"] * 7)
    assert len(parse_weather(ugly)) == MAX_GROUPS
    group = parse_group("Sct:T:+:<NoVis>:FL GW HvyRn DmgW SmA LgA")
    assert len(group.qualifiers) == MAX_QUALIFIERS


def test_dominant_group_follows_lattices() -> None:
    # Coverage first.
    assert dominant_group(parse_weather("SChc:T:+:<NoVis>:^Chc:F:none:<NoVis>:")).wx_type is WxType.FOG
    # Then intensity.
    assert dominant_group(parse_weather("Chc:S:-:<NoVis>:^Chc:R:m:<NoVis>:")).wx_type is WxType.RAIN
    # Then type.
    assert dominant_group(parse_weather("Chc:R:-:<NoVis>:^Chc:ZR:-:<NoVis>:")).wx_type is WxType.FREEZING_RAIN
    assert dominant_group(parse_weather("")) is None


def test_period_dominant_prefers_richer_match_on_tie() -> None:
    period = select_period_weather(
        [
            parse_weather("Lkly:R:-:<NoVis>:"),
            parse_weather("Lkly:R:-:<NoVis>:^Chc:S:-:<NoVis>:"),
            parse_weather("Chc:R:-:<NoVis>:"),
        ]
    )
    assert period.dominant.coverage is Coverage.LIKELY
    assert len(period.expression) == 2
    assert period.match_count == 3


def test_period_dominant_is_monotone() -> None:
    base = ["Chc:RW:-:<NoVis>:", "SChc:T:-:<NoVis>:"]
    chosen = select_period_weather(parse_weather(text) for text in base).dominant
    raised = select_period_weather(parse_weather(text) for text in ["Chc:RW:-:<NoVis>:", "Lkly:T:-:<NoVis>:"]).dominant
    assert raised.rank >= chosen.rank


def test_fog_fraction_counts_fog_dominated_matches() -> None:
    period = select_period_weather(
        [
            parse_weather("Areas:F:+:1/4SM:"),
            parse_weather("Patchy:F:none:<NoVis>:"),
            parse_weather("<NoCov>:<NoWx>:<NoInten>:<NoVis>:"),
            parse_weather("Chc:R:-:<NoVis>:^Patchy:F:none:<NoVis>:"),
        ]
    )
    assert period.fog_fraction == 0.5
    assert period.dominant.wx_type is WxType.RAIN


def test_translate_hazard_codes() -> None:
    watch = translate_hazard("WS.A")
    assert watch.headline == "Winter Storm Watch"
    assert watch.icon is None
    gale = translate_hazard("GL.W")
    assert gale.headline == "Gale Warning"
    assert gale.icon == "mf_gale.gif"
    assert translate_hazard("TS").icon == "m_wave.gif"
    assert translate_hazard("QQ.W") is None
