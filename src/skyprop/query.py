"""Query execution: validate once, then evaluate at one instant or over a sweep."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from skyprop.backend import AstronomyBackend
from skyprop.catalog import Catalog, CelestialObject
from skyprop.errors import SkyQueryError
from skyprop.instant import Instant
from skyprop.params import Location, QueryParams
from skyprop.properties import PropertySpec, check_spec, evaluate, resolve_properties
from skyprop.timeseries import EphemerisSpec
from skyprop.values import Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """Values at one instant, or the error that stopped evaluation there."""

    instant: Instant
    values: tuple[Value, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class QueryResult:
    obj: CelestialObject
    location: Location | None
    specs: tuple[PropertySpec, ...]
    rows: tuple[Row, ...]
    single: bool = False


def validate(
    obj: CelestialObject, specs: Iterable[PropertySpec], location: Location | None
) -> None:
    """Check every spec before any evaluation; the first failure raises.

    Raises:
        RequirementError: Missing location or unsupported object kind.
    """
    for spec in specs:
        check_spec(spec, obj, location)


def _evaluate_row(
    obj: CelestialObject,
    specs: tuple[PropertySpec, ...],
    instant: Instant,
    location: Location | None,
    backend: AstronomyBackend,
) -> Row:
    return Row(
        instant, tuple(evaluate(spec, obj, instant, location, backend) for spec in specs)
    )


def run_query(
    obj: CelestialObject,
    specs: list[PropertySpec],
    instant: Instant,
    location: Location | None,
    backend: AstronomyBackend,
) -> QueryResult:
    """Evaluate every spec at one instant; any failure propagates."""
    specs = tuple(specs)
    validate(obj, specs, location)
    row = _evaluate_row(obj, specs, instant, location, backend)
    return QueryResult(obj, location, specs, (row,), single=True)


def run_ephemeris(
    obj: CelestialObject,
    specs: list[PropertySpec],
    ephemeris: EphemerisSpec,
    location: Location | None,
    backend: AstronomyBackend,
    skip_errors: bool = False,
) -> QueryResult:
    """Evaluate every spec at each instant of the sweep.

    The first failing instant aborts the whole sweep unless ``skip_errors``
    is set, in which case the row records the error and the sweep goes on.
    """
    specs = tuple(specs)
    validate(obj, specs, location)
    rows: list[Row] = []
    for instant in ephemeris:
        try:
            rows.append(_evaluate_row(obj, specs, instant, location, backend))
        except SkyQueryError as e:
            if not skip_errors:
                raise
            logger.warning('Skipping %s: %s', instant, e)
            rows.append(Row(instant, error=str(e)))
    logger.debug('Evaluated %d row(s) for %s', len(rows), obj.name)
    return QueryResult(obj, location, specs, tuple(rows))


def execute(params: QueryParams, catalog: Catalog, backend: AstronomyBackend) -> QueryResult:
    """Resolve names in ``params`` and run the query or sweep it describes."""
    obj = catalog.resolve(params.object_name)
    specs = resolve_properties(params.property_aliases, catalog)
    if params.ephemeris is not None:
        return run_ephemeris(
            obj, specs, params.ephemeris, params.location, backend, params.skip_errors
        )
    return run_query(obj, specs, params.date, params.location, backend)
