"""Render query results as a terminal table, CSV or JSON."""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from skyprop.errors import ConfigurationError
from skyprop.query import QueryResult, Row
from skyprop.record import Record, display_width

DATE_LABEL = 'Date'
ERROR_PREFIX = 'ERROR: '


def _title(result: QueryResult) -> str:
    if result.location is None:
        return result.obj.name
    return f'{result.obj.name} at {result.location}'


def _cells(row: Row) -> list[str]:
    return [row.instant.isoformat()] + [value.text() for value in row.values]


def render_term(result: QueryResult) -> str:
    """Fixed-width table; a lone value at a single instant is printed bare."""
    if result.single and len(result.specs) == 1 and result.rows:
        return result.rows[0].values[0].text() + '\n'
    header = [DATE_LABEL] + [spec.label for spec in result.specs]
    widths = [display_width(label) for label in header]
    for row in result.rows:
        cells = [row.instant.isoformat()] if row.error is not None else _cells(row)
        for i, cell in enumerate(cells):
            widths[i] = max(widths[i], display_width(cell))
    rule = '-' * (sum(widths) + len(widths) - 1)

    out = io.StringIO()
    out.write(_title(result) + '\n')
    out.write(rule + '\n')
    record = Record(widths)
    for label in header:
        record.append(label, center=True)
    record.write(out)
    out.write(rule + '\n')
    for row in result.rows:
        if row.error is not None:
            record.append(row.instant.isoformat())
            record.append_span(ERROR_PREFIX + row.error)
        else:
            for cell in _cells(row):
                record.append(cell)
        record.write(out)
    return out.getvalue()


def render_csv(result: QueryResult) -> str:
    """Header ``Date,<labels>`` then one line per instant."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator='\n')
    writer.writerow([DATE_LABEL] + [spec.label for spec in result.specs])
    for row in result.rows:
        if row.error is not None:
            blanks = [''] * (len(result.specs) - 1)
            writer.writerow([row.instant.isoformat(), ERROR_PREFIX + row.error] + blanks)
        else:
            writer.writerow(_cells(row))
    return out.getvalue()


def _json_row(result: QueryResult, row: Row) -> dict[str, Any]:
    item: dict[str, Any] = {'date': row.instant.isoformat()}
    if row.error is not None:
        for spec in result.specs:
            item[spec.json_key] = None
        item['error'] = row.error
        return item
    for spec, value in zip(result.specs, row.values):
        item[spec.json_key] = value.json()
    return item


def render_json(result: QueryResult) -> str:
    """Array of objects keyed by ``date`` and each property's JSON key."""
    rows = [_json_row(result, row) for row in result.rows]
    return json.dumps(rows, indent=2, ensure_ascii=False) + '\n'


_RENDERERS = {
    'term': render_term,
    'csv': render_csv,
    'json': render_json,
}


def render(result: QueryResult, fmt: str = 'term') -> str:
    """Render ``result`` in ``fmt`` (term, csv or json).

    Raises:
        ConfigurationError: Unknown format.
    """
    renderer = _RENDERERS.get(fmt)
    if renderer is None:
        raise ConfigurationError(f'Unknown output format {fmt!r} (use term, csv or json)')
    return renderer(result)
