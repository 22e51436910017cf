"""Tests for the star catalog reader."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from skyprop.config import get_star_catalog_path
from skyprop.stars import read_stars


def test_read_stars_parses_sexagesimal_fields(tmp_path: Path) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text(
        '! test catalog\n'
        'Alpha Test\n'
        '06 00 00\n'
        '-30 30 00\n'
        '1.5\n'
        '\n'
        'Beta Test\n'
        '12.5\n'
        '45\n'
        '-0.5\n',
        encoding='utf-8',
    )
    stars = read_stars(path)
    assert [s.name for s in stars] == ['Alpha Test', 'Beta Test']
    assert stars[0].ra_deg == pytest.approx(90.0)
    assert stars[0].dec_deg == pytest.approx(-30.5)
    assert stars[1].ra_deg == pytest.approx(187.5)
    assert stars[1].magnitude == pytest.approx(-0.5)


def test_read_stars_skips_malformed_entries(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text('Bad\nxx\n10\n1\nGood\n1\n2\n3\n', encoding='utf-8')
    with caplog.at_level(logging.WARNING, logger='skyprop.stars'):
        stars = read_stars(path)
    assert [s.name for s in stars] == ['Good']
    assert 'Bad' in caplog.text


def test_read_stars_ignores_incomplete_trailing_entry(tmp_path: Path) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text('One\n1\n2\n3\nTwo\n1\n', encoding='utf-8')
    assert [s.name for s in read_stars(path)] == ['One']


def test_read_stars_respects_max_stars(tmp_path: Path) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text('A\n1\n2\n3\nB\n1\n2\n3\n', encoding='utf-8')
    assert len(read_stars(path, max_stars=1)) == 1


def test_bundled_catalog_parses_completely() -> None:
    stars = read_stars(get_star_catalog_path())
    assert len(stars) >= 100
    assert all(0.0 <= s.ra_deg < 360.0 for s in stars)
    assert all(-90.0 <= s.dec_deg <= 90.0 for s in stars)


def test_star_catalog_path_from_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    path = tmp_path / 'mine.txt'
    monkeypatch.setenv('SKYPROP_STARS', str(path))
    assert get_star_catalog_path() == path
