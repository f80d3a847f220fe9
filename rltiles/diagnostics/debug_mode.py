"""Debug mode for tile coders.

Tile coders clamp out-of-range inputs into their boundary tiles without a
word, which is what a learning loop wants but hides badly chosen bounds.
Debug mode turns on two extra checks in :class:`rltiles.tilecoding.TileCoder`:

* every ``encode``, ``encode_indices`` and ``encode_batch`` call logs a
  WARNING naming the dimensions of any input that had to be clamped;
* every dense output of ``encode`` and ``encode_batch`` (each column for a
  batch) is verified with :func:`rltiles.diagnostics.assert_tile_coded`, so a
  result with the wrong number of active features raises ValueError.

The initial state comes from the ``RLTILES_DEBUG`` environment variable
(``1``, ``true``, ``yes`` or ``on``, case-insensitive).
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "RLTILES_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


_debug_enabled: bool = _flag_from_env(os.getenv(_DEBUG_ENV_VAR))


def is_debug_enabled() -> bool:
    """Return True while tile coders report clamped inputs and check outputs."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Switch tile-coder debug checks on or off for the whole process.

    Overrides whatever ``RLTILES_DEBUG`` selected at import time.

    Parameters
    ----------
    enabled:
        True to log clamped inputs and verify dense encodings.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Run a block with tile-coder debug checks forced on (or off).

    The previous setting is restored on exit, also when the block raises.

    Example
    -------
    >>> from rltiles.tilecoding import TileCoder
    >>> coder = TileCoder([0.0], [1.0], [[4]])
    >>> with debug_context(True):
    ...     _ = coder.encode([2.0])  # logs that dimension 0 was clamped
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous
