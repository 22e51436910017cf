"""End-to-end tests of the skyprop command line with a stub backend."""

from __future__ import annotations

import json

import pytest
from stub_backend import StubBackend

from skyprop.cli import main as cli_main
from skyprop.instant import Instant

FIXED_NOW = Instant.from_calendar(2024, 3, 20, 12, 0, 0.0)


@pytest.fixture(autouse=True)
def fixed_now(monkeypatch: pytest.MonkeyPatch) -> Instant:
    monkeypatch.setattr(Instant, 'now', classmethod(lambda cls: FIXED_NOW))
    return FIXED_NOW


def test_moon_phase_with_defaults(capsys: pytest.CaptureFixture[str]) -> None:
    """Phase name and percentage at the stubbed now, with no date or location."""
    backend = StubBackend(phase_deg=90.0)
    rc = cli_main.main(['moon', 'phase'], backend=backend)
    assert rc == 0
    assert capsys.readouterr().out == '🌓 First Quarter (50.0%)\n'
    assert backend.calls == [('phase', 301, FIXED_NOW)]


def test_fixed_point_magnitude_is_unsupported(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_main.main(['latlong:0,45w', 'magnitude'], backend=StubBackend())
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith('Error: ')
    assert 'unsupported for this object kind' in captured.err


def test_sun_horizontal_csv(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_main.main(
        ['sun', 'horiz', '-Tcsv', '-l', '51.48n,0e', '-E', '2024-03-20,1h,2024-03-20T02:00'],
        backend=StubBackend(),
    )
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == 'Date,Coordinates (Azi/Alt)'
    assert len(lines) == 4
    assert [line.split(',')[0] for line in lines[1:]] == [
        '2024-03-20T00:00:00',
        '2024-03-20T01:00:00',
        '2024-03-20T02:00:00',
    ]


def test_sweep_relative_to_date(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_main.main(
        ['mars', 'dist', '-d', '2024-01-01', '-E', '+1d,12h,+1d', '-T', 'json'],
        backend=StubBackend(),
    )
    assert rc == 0
    rows = json.loads(capsys.readouterr().out)
    assert [row['date'] for row in rows] == [
        '2024-01-02T00:00:00',
        '2024-01-02T12:00:00',
        '2024-01-03T00:00:00',
    ]


def test_horizontal_without_location(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_main.main(['sun', 'horiz'], backend=StubBackend())
    assert rc == 1
    assert 'requires a location (-l)' in capsys.readouterr().err


def test_unknown_object_lists_valid_names(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_main.main(['jupyter', 'equ'], backend=StubBackend())
    assert rc == 1
    err = capsys.readouterr().err
    assert "Unknown object 'jupyter'" in err
    assert 'Jupiter' in err
    assert 'Valid objects:' in err


@pytest.mark.parametrize(
    ('argv', 'message'),
    [
        (['sun', 'equ', '-d', 'tomorrow'], 'Invalid date'),
        (['sun', 'equ', '-l', '95,0'], 'Latitude over 90'),
        (['sun', 'equ', '-E', 'now,0s,+1d'], 'must not be zero'),
        (['sun', 'equ', '-E', 'now,1d'], 'Bad ephemeris range'),
        (['sun', 'bogus'], 'Unknown property'),
    ],
)
def test_query_errors_exit_one(
    argv: list[str], message: str, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli_main.main(argv, backend=StubBackend()) == 1
    assert message in capsys.readouterr().err


def test_sweep_skip_errors(capsys: pytest.CaptureFixture[str]) -> None:
    backend = StubBackend(fail_at={Instant.from_calendar(2024, 1, 2)})
    argv = ['moon', 'equ', 'mag', '-E', '2024-01-01,1d,2024-01-03']
    assert cli_main.main(argv, backend=backend) == 1
    capsys.readouterr()
    assert cli_main.main(argv + ['--skip-errors'], backend=backend) == 0
    out = capsys.readouterr().out
    assert 'ERROR: no ephemeris' in out
    assert len(out.splitlines()) == 7


def test_missing_property_is_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(['sun'], backend=StubBackend())
    assert excinfo.value.code == 2
    capsys.readouterr()


def test_bad_format_is_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(['sun', 'equ', '-T', 'xml'], backend=StubBackend())
    assert excinfo.value.code == 2
    capsys.readouterr()


@pytest.mark.parametrize(
    'argv',
    [
        ['--rpn', 'moon', 'phase', '.'],
        ['-r', 'moon', 'phase'],
        ['moon', 'phase', '-T', 'space'],
    ],
)
def test_stack_words_and_space_format_are_usage_errors(
    argv: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    """Only OBJECT PROPERTY... queries and term/csv/json output are accepted."""
    backend = StubBackend()
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(argv, backend=backend)
    assert excinfo.value.code == 2
    assert backend.calls == []
    capsys.readouterr()


def test_list(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main.main(['--list']) == 0
    out = capsys.readouterr().out
    assert '  Sirius' in out
    assert '  angbetween:<object>' in out
    assert '  phaseprecent' in out
