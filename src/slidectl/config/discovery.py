"""Locate ``slidectl.toml``.

An explicit ``SLIDECTL_CONFIG`` path short-circuits the search; otherwise
the nearest file in the start directory or any ancestor is used.
"""

from __future__ import annotations

import os
from itertools import chain
from pathlib import Path

CONFIG_FILENAME = "slidectl.toml"
CONFIG_ENV_VAR = "SLIDECTL_CONFIG"


def _from_env() -> Path | None:
    raw = os.environ.get(CONFIG_ENV_VAR)
    return Path(raw) if raw else None


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    When ``SLIDECTL_CONFIG`` is set it is the only candidate considered,
    even if it does not exist.
    """
    explicit = _from_env()
    if explicit is not None:
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    candidates = (d / CONFIG_FILENAME for d in chain([here], here.parents))
    return next((c for c in candidates if c.is_file()), None)
