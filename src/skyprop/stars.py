"""Named star catalog reader."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from skyprop.angle_utils import parse_angle_token, parse_number
from skyprop.constants import DEGREES_PER_HOUR_RA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Star:
    """A single star entry: name, J2000 RA/Dec in degrees and V magnitude."""

    name: str
    ra_deg: float
    dec_deg: float
    magnitude: float


def _next_data_line(f: TextIO) -> str | None:
    """Next non-blank, non-comment line, stripped; None at end of file."""
    for line in f:
        line = line.strip()
        if line and not line.startswith('!'):
            return line
    return None


def read_stars(filepath: str | Path, max_stars: int = 1000) -> list[Star]:
    """Read star list from file.

    Format: for each star, a line with the name, then RA (hours or h m s),
    then Dec (deg or d m s), then V magnitude. Lines starting with '!' are
    skipped. Entries whose fields do not parse are skipped with a warning.

    Parameters:
        filepath: Path to star catalog file.
        max_stars: Maximum number of stars to read.

    Returns:
        List of Star in file order.
    """
    path = Path(filepath)
    stars: list[Star] = []
    with path.open(encoding='utf-8') as f:
        while len(stars) < max_stars:
            name = _next_data_line(f)
            ra_line = _next_data_line(f)
            dec_line = _next_data_line(f)
            mag_line = _next_data_line(f)
            if name is None or ra_line is None or dec_line is None or mag_line is None:
                break
            ra_val = parse_angle_token(ra_line)
            dec_val = parse_angle_token(dec_line)
            mag_val = parse_number(mag_line)
            if ra_val is None or dec_val is None or mag_val is None:
                logger.warning('Skipping malformed star entry %r in %s', name, path)
                continue
            stars.append(
                Star(
                    name=name,
                    ra_deg=ra_val * DEGREES_PER_HOUR_RA,
                    dec_deg=dec_val,
                    magnitude=mag_val,
                )
            )
    logger.debug('Read %d stars from %s', len(stars), path)
    return stars
