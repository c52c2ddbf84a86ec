import xml.etree.ElementTree as ET

from dwmlgen import cli
from dwmlgen.config import load_config

CONFIG = """
product = "time-series"
icons = false

[[point]]
latitude = 38.99
longitude = -77.01
utc_offset = -5
observes_dst = true
"""

MATCHES = [
    {"element": "t", "valid_time": "2006-04-15T12:00:00Z", "value": 60},
    {"element": "t", "valid_time": "2006-04-15T15:00:00Z", "value": 62},
    {"element": "wx", "valid_time": "2006-04-15T12:00:00Z", "value": "Chc:R:-:<NoVis>:"},
]

NOW = "2006-04-15T00:00:00Z"


def test_version_flag(runner) -> None:
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert "dwmlgen" in result.output


def test_elements_lists_catalogue(runner) -> None:
    result = runner.invoke(cli.app, ["elements"])
    assert result.exit_code == 0
    assert "NDFD Elements" in result.output
    assert "maxt" in result.output


def test_translate_weather_and_hazards(runner) -> None:
    result = runner.invoke(cli.app, ["translate", "Chc:R:-:<NoVis>:"])
    assert result.exit_code == 0
    assert result.output.strip() == "chance light rain"

    hazard = runner.invoke(cli.app, ["translate", "--hazard", "GL.W"])
    assert hazard.exit_code == 0
    assert "Gale Warning" in hazard.output
    assert "mf_gale.gif" in hazard.output

    unknown = runner.invoke(cli.app, ["translate", "--hazard", "QQ.W"])
    assert unknown.exit_code == 1
    assert "Unknown hazard code" in unknown.output


def test_config_hash_matches_loader(runner, write_config) -> None:
    path = write_config(CONFIG)
    result = runner.invoke(cli.app, ["config-hash", "--config", str(path)])
    assert result.exit_code == 0
    assert load_config(path).hash in result.output.replace("\n", "")


def test_generate_writes_document_to_stdout(runner, write_config, write_matches) -> None:
    config = write_config(CONFIG)
    matches = write_matches(MATCHES)
    result = runner.invoke(cli.app, ["generate", "-c", str(config), "-m", str(matches), "--now", NOW])
    assert result.exit_code == 0, result.output
    assert result.stdout.startswith('<?xml version="1.0"?>')
    root = ET.fromstring(result.stdout)
    values = root.find("data/parameters/temperature").findall("value")
    assert [value.text for value in values] == ["60", "62"]
    assert root.find("data/parameters/weather/weather-conditions/value").get("coverage") == "chance"


def test_generate_overrides_and_output_file(runner, write_config, write_matches, tmp_path) -> None:
    config = write_config(CONFIG)
    matches = write_matches(MATCHES)
    target = tmp_path / "out" / "forecast.xml"
    result = runner.invoke(
        cli.app,
        ["generate", "-c", str(config), "-m", str(matches), "-o", str(target), "--units", "m", "-e", "t", "--now", NOW],
    )
    assert result.exit_code == 0, result.output
    assert "DWML Document Summary" in result.output
    root = ET.fromstring(target.read_text(encoding="utf-8"))
    temperature = root.find("data/parameters/temperature")
    assert temperature.get("units") == "Celsius"
    assert [value.text for value in temperature.findall("value")] == ["16", "17"]


def test_generate_without_values_writes_nothing(runner, write_config, write_matches, tmp_path) -> None:
    target = tmp_path / "forecast.xml"
    result = runner.invoke(
        cli.app,
        ["generate", "-c", str(write_config(CONFIG)), "-m", str(write_matches([])), "-o", str(target)],
    )
    assert result.exit_code == 0
    assert "No forecast values found" in result.output
    assert not target.exists()


def test_generate_rejects_invalid_config(runner, write_config, write_matches) -> None:
    config = write_config(CONFIG + '\nunexpected = "nope"\n')
    result = runner.invoke(cli.app, ["generate", "-c", str(config), "-m", str(write_matches(MATCHES))])
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_generate_rejects_bad_override(runner, write_config, write_matches) -> None:
    result = runner.invoke(
        cli.app,
        ["generate", "-c", str(write_config(CONFIG)), "-m", str(write_matches(MATCHES)), "-p", "hourly"],
    )
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_generate_requires_a_point_in_sector(runner, write_config, write_matches) -> None:
    config = write_config(CONFIG + "in_sector = false\n")
    result = runner.invoke(cli.app, ["generate", "-c", str(config), "-m", str(write_matches(MATCHES))])
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_generate_rejects_bad_match_file(runner, write_config, write_matches) -> None:
    matches = write_matches([{"element": "bogus", "valid_time": "2006-04-15T12:00:00Z", "value": 1}])
    result = runner.invoke(cli.app, ["generate", "-c", str(write_config(CONFIG)), "-m", str(matches)])
    assert result.exit_code == 1
    assert "Match file error" in result.output
