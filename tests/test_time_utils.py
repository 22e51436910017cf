"""Tests for rms-julian time wrappers."""

from __future__ import annotations

import pytest

from skyprop import time_utils


def test_ensure_leapsecs_sets_spice_ut_model(monkeypatch: pytest.MonkeyPatch) -> None:
    """Leap-second init selects the SPICE-compatible UT model before loading."""

    calls: list[tuple[str, tuple[object, ...]]] = []

    def _set_ut_model(model: str, future: object = None) -> None:
        del future
        calls.append(('set_ut_model', (model,)))

    def _load_lsk(path: str | None = None) -> None:
        del path
        calls.append(('load_lsk', ()))

    monkeypatch.setattr('julian.set_ut_model', _set_ut_model)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('skyprop.time_utils.get_leapsecs_path', lambda: 'dummy.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()

    assert calls == [('set_ut_model', ('SPICE',)), ('load_lsk', ())]


def test_ensure_leapsecs_falls_back_to_bundled_lsk(monkeypatch: pytest.MonkeyPatch) -> None:
    paths: list[str | None] = []

    def _load_lsk(path: str | None = None) -> None:
        paths.append(path)
        if path is not None:
            raise OSError('missing')

    monkeypatch.setattr('julian.set_ut_model', lambda model, future=None: None)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('skyprop.time_utils.get_leapsecs_path', lambda: 'missing.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()

    assert paths == ['missing.tls', None]
    assert time_utils._leapsecs_loaded


@pytest.mark.parametrize(
    ('ymd', 'expected'),
    [
        ((2000, 1, 1), 0),
        ((2000, 4, 52), 142),
        ((2000, 13, 1), 366),
        ((2000, 0, 1), -31),
        ((1970, 1, 1), -10957),
    ],
)
def test_day_from_ymd_rolls_over(ymd: tuple[int, int, int], expected: int) -> None:
    assert time_utils.day_from_ymd(*ymd) == expected


def test_days_in_month() -> None:
    assert time_utils.days_in_month(2000, 2) == 29
    assert time_utils.days_in_month(1900, 2) == 28
    assert time_utils.days_in_month(2023, 12) == 31


def test_hms_from_sec() -> None:
    assert time_utils.hms_from_sec(3723.5) == (1, 2, 3.5)
