"""SPICE kernel loading."""

from __future__ import annotations

import logging
from pathlib import Path

import cspyce

from skyprop.config import get_kernel_names, get_spice_path

logger = logging.getLogger(__name__)

# Kernels are loaded once per process and left loaded.
_loaded = False


def load_kernels() -> tuple[bool, str | None]:
    """Load the configured kernels from SPICE_PATH.

    Returns (True, None) if loaded, (False, reason) on failure. A kernel that
    exists but fails to load is logged and skipped; any missing kernel is a
    failure.
    """
    global _loaded
    if _loaded:
        return (True, None)
    base = Path(get_spice_path())
    if not base.exists():
        return (False, f'SPICE_PATH directory does not exist: {base}')
    if not base.is_dir():
        return (False, f'SPICE_PATH is not a directory: {base}')
    names = get_kernel_names()
    missing = [name for name in names if not (base / name).exists()]
    if missing:
        return (
            False,
            f'Kernel files not found under {base}: {", ".join(missing)}. '
            'Set SPICE_PATH to a directory holding them or list others in SKYPROP_KERNELS.',
        )
    loaded = 0
    for name in names:
        kpath = base / name
        try:
            cspyce.furnsh(str(kpath))
        except (RuntimeError, OSError, ValueError) as e:
            logger.warning('Failed to load %s: %s', kpath, e)
            continue
        logger.debug('Loaded kernel %s', kpath)
        loaded += 1
    if loaded == 0:
        return (False, f'No kernels could be loaded from {base}')
    _loaded = True
    logger.info('Loaded %d SPICE kernel(s) from %s', loaded, base)
    return (True, None)
