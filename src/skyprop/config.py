"""Configuration: SPICE kernel paths, star catalog and leap seconds from environment."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Paths; env var overrides with sensible defaults.
DEFAULT_SPICE_PATH = str(Path.home() / '.skyprop' / 'spice')
DEFAULT_KERNELS = ('naif0012.tls', 'pck00011.tpc', 'de440s.bsp')
KERNEL_MANIFEST = 'kernels.txt'


def get_spice_path() -> str:
    """Return SPICE kernel root directory (SPICE_PATH env var or default).

    Returns:
        Path string.
    """
    return os.environ.get('SPICE_PATH', DEFAULT_SPICE_PATH)


def get_kernel_names() -> list[str]:
    """Return the kernel file names to load from the SPICE directory.

    SKYPROP_KERNELS (comma-separated) wins; otherwise a ``kernels.txt``
    manifest under SPICE_PATH is read (one name per line, ``!`` starts a
    comment); otherwise DEFAULT_KERNELS.

    Returns:
        Kernel file names relative to SPICE_PATH, in load order.
    """
    env = os.environ.get('SKYPROP_KERNELS', '').strip()
    if env:
        return [name.strip() for name in env.split(',') if name.strip()]
    manifest = Path(get_spice_path()) / KERNEL_MANIFEST
    if manifest.exists():
        names: list[str] = []
        with manifest.open() as f:
            for line in f:
                line = line.split('!', 1)[0].strip()
                if line:
                    names.append(line)
        if names:
            return names
        logger.warning('Kernel manifest %s lists no kernels; using defaults', manifest)
    return list(DEFAULT_KERNELS)


def get_star_catalog_path() -> Path:
    """Return the star catalog file (SKYPROP_STARS env var or bundled data)."""
    path = os.environ.get('SKYPROP_STARS', '').strip()
    if path:
        return Path(path)
    return Path(__file__).parent / 'data' / 'stars.txt'


def get_leapsecs_path() -> str:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Prefers JULIAN_LEAPSECS, then a .tls file under SPICE_PATH.

    Returns:
        Path string to an LSK (which may not exist; callers fall back to the
        rms-julian bundled LSK).
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    base = Path(get_spice_path())
    for name in ('naif0012.tls', 'naif0011.tls', 'leapseconds.tls'):
        p = base / name
        if p.exists():
            return str(p)
    return str(base / 'naif0012.tls')
