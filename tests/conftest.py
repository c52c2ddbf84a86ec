from pathlib import Path
import json
import textwrap
from typing import Callable, List

import pytest
from typer.testing import CliRunner

from dwmlgen.config import PointConfig
from dwmlgen.ndfd import Match, NdfdElement, ValueKind
from dwmlgen.util import HOUR, LocalClock, parse_timestamp

# Washington, DC area: Eastern time, observes daylight saving.
POINT = {"latitude": 38.99, "longitude": -77.01, "utc_offset": -5.0, "observes_dst": True}


def epoch(text: str) -> int:
    return parse_timestamp(text)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def clock() -> LocalClock:
    return LocalClock(utc_offset=-5.0, observes_dst=True)


@pytest.fixture
def point() -> PointConfig:
    return PointConfig(**POINT)


@pytest.fixture
def series() -> Callable[..., List[Match]]:
    """
    Factory for evenly spaced matches of one element.

    `value` may be a constant, a list (one entry per row) or a callable taking the row index.
    None produces a missing value; strings produce coded weather.
    """

    def _series(element: NdfdElement, first: str, count: int, step_hours: int, value=0.0, point: int = 0) -> List[Match]:
        start = epoch(first)
        rows = []
        for index in range(count):
            if callable(value):
                item = value(index)
            elif isinstance(value, list):
                item = value[index]
            else:
                item = value
            valid = start + index * step_hours * HOUR
            if item is None:
                rows.append(Match(element, valid, ValueKind.MISSING, point=point))
            elif isinstance(item, str):
                rows.append(Match(element, valid, ValueKind.CODED, text=item, point=point))
            else:
                rows.append(Match(element, valid, ValueKind.PRESENT, value=float(item), point=point))
        return rows

    return _series


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    def _write(body: str) -> Path:
        path = tmp_path / "document.toml"
        path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_matches(tmp_path: Path) -> Callable[[list], Path]:
    def _write(records: list) -> Path:
        path = tmp_path / "matches.json"
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write
