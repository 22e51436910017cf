"""CLI entry point: skyprop OBJECT PROPERTY [PROPERTY ...]."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn

from skyprop import __version__
from skyprop.backend import AstronomyBackend
from skyprop.catalog import Catalog, default_catalog
from skyprop.errors import SkyQueryError, UnknownObjectError
from skyprop.output import render
from skyprop.params import (
    OUTPUT_FORMATS,
    QueryParams,
    parse_date,
    parse_ephemeris_spec,
    parse_location,
)
from skyprop.properties import ALIASES
from skyprop.query import execute

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SKYPROP_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('SKYPROP_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='skyprop',
        description='Positions, brightness, phase and rise/set times of celestial objects.',
    )
    parser.add_argument('object', nargs='?', help='Object name, or latlong:LAT,LONG')
    parser.add_argument('properties', nargs='*', metavar='property', help='Property aliases')
    parser.add_argument(
        '-d', '--date', default='now', help='Date: now, @unix, <n>jd, +<n><unit> or ISO'
    )
    parser.add_argument(
        '-l', '--location', default=None, help='Observer LAT,LONG (e.g. 51.5n,0.1w)'
    )
    parser.add_argument(
        '-T', '--format', dest='output_format', default='term', choices=OUTPUT_FORMATS,
        help='Output format',
    )
    parser.add_argument(
        '-E', '--ephem', default=None, metavar='START,STEP,END',
        help='Sweep from START to END by STEP (e.g. now,1d,+1w)',
    )
    parser.add_argument(
        '--skip-errors', action='store_true',
        help='In a sweep, report failing instants and continue',
    )
    parser.add_argument('--list', action='store_true', help='List objects and property aliases')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def _list(catalog: Catalog) -> None:
    print('Objects:')
    for name in catalog.names:
        print(f'  {name}')
    print('Properties:')
    for alias in ALIASES:
        print(f'  {alias}:<object>' if alias == 'angbetween' else f'  {alias}')


def _params_from_args(args: argparse.Namespace) -> QueryParams:
    """Parse the textual options into QueryParams.

    Raises:
        ParseError: Malformed date, location or ephemeris range.
        ConfigurationError: Zero ephemeris step.
    """
    date = parse_date(args.date)
    location = parse_location(args.location) if args.location is not None else None
    ephemeris = parse_ephemeris_spec(args.ephem, date) if args.ephem is not None else None
    return QueryParams(
        object_name=args.object,
        property_aliases=list(args.properties),
        date=date,
        location=location,
        output_format=args.output_format,
        ephemeris=ephemeris,
        skip_errors=args.skip_errors,
    )


def main(
    argv: list[str] | None = None,
    backend: AstronomyBackend | None = None,
    catalog: Catalog | None = None,
) -> int:
    """Entry point for the skyprop CLI.

    Parameters:
        argv: Arguments (default sys.argv[1:]).
        backend: Astronomy backend; the SPICE backend when None.
        catalog: Object catalog; the bundled catalog when None.

    Returns:
        Exit code 0 on success, 1 on error. Usage errors exit with 2.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        if catalog is None:
            catalog = default_catalog()
        if args.list:
            _list(catalog)
            return 0
        if not args.object or not args.properties:
            parser.error('OBJECT and at least one PROPERTY are required')
        params = _params_from_args(args)
        if backend is None:
            from skyprop.spice.backend import SpiceBackend

            backend = SpiceBackend()
        result = execute(params, catalog, backend)
        sys.stdout.write(render(result, params.output_format))
    except UnknownObjectError as e:
        print(f'Error: {e}', file=sys.stderr)
        print(f'Valid objects: {", ".join(e.valid_names)}', file=sys.stderr)
        return 1
    except SkyQueryError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
