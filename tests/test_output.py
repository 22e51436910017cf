"""Tests for term, CSV and JSON rendering."""

from __future__ import annotations

import json

import pytest
from stub_backend import StubBackend

from skyprop.catalog import Catalog
from skyprop.errors import ConfigurationError
from skyprop.instant import Instant, Step
from skyprop.output import render
from skyprop.params import Location
from skyprop.properties import resolve_properties
from skyprop.query import QueryResult, run_ephemeris, run_query
from skyprop.record import Record, display_width, pad
from skyprop.timeseries import EphemerisSpec

START = Instant.from_calendar(2024, 1, 1)
TWO_DAYS = EphemerisSpec(START, Step(seconds=86400.0), START.add_seconds(86400.0))
GREENWICH = Location(51.48, 0.0)


def _sweep(catalog: Catalog, aliases: list[str], backend: StubBackend, **kwargs) -> QueryResult:  # type: ignore[no-untyped-def]
    specs = resolve_properties(aliases, catalog)
    return run_ephemeris(catalog.resolve('moon'), specs, TWO_DAYS, GREENWICH, backend, **kwargs)


def test_single_value_is_bare(catalog: Catalog, backend: StubBackend) -> None:
    specs = resolve_properties(['equ'], catalog)
    result = run_query(catalog.resolve('moon'), specs, START, None, backend)
    assert render(result, 'term') == '06h00m00s +10°00′0.0″\n'


def test_two_row_table_has_four_non_data_lines(catalog: Catalog, backend: StubBackend) -> None:
    lines = render(_sweep(catalog, ['mag'], backend), 'term').splitlines()
    assert len(lines) == 6
    title, rule, header, rule2, *data = lines
    assert title == 'Moon at 51.48°N 0°E'
    assert set(rule) == {'-'} and rule == rule2
    assert header.split() == ['Date', 'Magnitude']
    assert data == ['2024-01-01T00:00:00 -12.50', '2024-01-02T00:00:00 -12.50']


def test_single_instant_with_several_properties_is_a_table(
    catalog: Catalog, backend: StubBackend
) -> None:
    specs = resolve_properties(['mag', 'dist'], catalog)
    result = run_query(catalog.resolve('moon'), specs, START, None, backend)
    lines = render(result).splitlines()
    assert lines[0] == 'Moon'
    assert len(lines) == 5


def test_columns_are_aligned_by_display_width(catalog: Catalog, backend: StubBackend) -> None:
    lines = render(_sweep(catalog, ['phase', 'mag'], backend), 'term').splitlines()
    # date 19, phase 16 (emoji counts two), magnitude 9, one blank between
    assert display_width(lines[1]) == 46
    assert lines[4].endswith('🌕 Full (100.0%) -12.50')
    assert [display_width(line) for line in lines[4:]] == [43, 43]


def test_skipped_row_prints_error(catalog: Catalog) -> None:
    backend = StubBackend(fail_at={START})
    result = _sweep(catalog, ['equ', 'mag'], backend, skip_errors=True)
    lines = render(result, 'term').splitlines()
    assert lines[4].startswith('2024-01-01T00:00:00 ERROR: no ephemeris')
    csv_lines = render(result, 'csv').splitlines()
    assert csv_lines[1].startswith('2024-01-01T00:00:00,ERROR: no ephemeris')
    assert csv_lines[1].endswith(',')
    rows = json.loads(render(result, 'json'))
    assert rows[0]['equatorial'] is None
    assert rows[0]['error'].startswith('no ephemeris')
    assert rows[1]['magnitude'] == pytest.approx(-12.5)


def test_csv_header_and_rows(catalog: Catalog, backend: StubBackend) -> None:
    text = render(_sweep(catalog, ['horiz'], backend), 'csv')
    lines = text.splitlines()
    assert lines[0] == 'Date,Coordinates (Azi/Alt)'
    assert len(lines) == 3
    assert lines[1].startswith('2024-01-01T00:00:00,')


def test_csv_quotes_fields_with_commas(catalog: Catalog, backend: StubBackend) -> None:
    specs = resolve_properties(['angbetween:latlong:1,2'], catalog)
    result = run_query(catalog.resolve('moon'), specs, START, None, backend)
    assert render(result, 'csv').splitlines()[0] == 'Date,"Angle to latlong:1,2"'


def test_json_shapes(catalog: Catalog) -> None:
    backend = StubBackend(phase_deg=90.0)
    rows = json.loads(render(_sweep(catalog, ['equ', 'horiz', 'phase', 'illumfrac'], backend), 'json'))
    assert len(rows) == 2
    first = rows[0]
    assert first['date'] == '2024-01-01T00:00:00'
    assert first['equatorial'] == {'ra': 90.0, 'dec': 10.0}
    assert set(first['horizontal']) == {'azimuth', 'altitude'}
    assert first['phase']['name'] == 'First Quarter'
    assert first['illuminated_fraction'] == pytest.approx(0.5)


def test_json_rise_is_iso_string(catalog: Catalog, backend: StubBackend) -> None:
    specs = resolve_properties(['rise'], catalog)
    result = run_query(catalog.resolve('sun'), specs, START, GREENWICH, backend)
    (row,) = json.loads(render(result, 'json'))
    assert row['rise'].startswith('2024-01-01T')


def test_zero_rows(catalog: Catalog, backend: StubBackend) -> None:
    specs = resolve_properties(['mag'], catalog)
    empty = EphemerisSpec(START, Step(seconds=60.0), START.add_seconds(-60.0))
    result = run_ephemeris(catalog.resolve('moon'), specs, empty, None, backend)
    assert render(result, 'json') == '[]\n'
    assert render(result, 'csv') == 'Date,Magnitude\n'
    assert len(render(result, 'term').splitlines()) == 4


def test_unknown_format(catalog: Catalog, backend: StubBackend) -> None:
    with pytest.raises(ConfigurationError):
        render(_sweep(catalog, ['mag'], backend), 'xml')


def test_display_width_counts_wide_characters() -> None:
    assert display_width('abc') == 3
    assert display_width('🌕') == 2
    assert display_width('🌕 Full') == 7
    assert pad('🌕', 4) == '🌕  '
    assert pad('ab', 6, center=True) == '  ab  '


def test_record_pads_cells_and_spans() -> None:
    record = Record([4, 3, 3])
    record.append('a')
    record.append('b', center=True)
    record.append('c')
    assert record.get_line() == 'a     b  c'
    record.init()
    record.append('x')
    record.append_span('ERROR: bad')
    assert record.get_line() == 'x    ERROR: bad'
