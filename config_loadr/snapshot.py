"""Build the environment snapshot a load runs against."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

from config_loadr.logger import get_logger

log = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def read_env_file(path: PathLike) -> Dict[str, str]:
    """Return the assignments of a dotenv file, ``{}`` when it does not exist."""

    env_path = Path(path)
    if not env_path.exists():
        log.debug("env file {} not found, skipping", env_path)
        return {}
    values = {
        key: value
        for key, value in dotenv_values(env_path, verbose=False).items()
        if value is not None
    }
    log.debug("read {} variable(s) from {}", len(values), env_path)
    return values


def snapshot(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[PathLike] = None,
) -> Dict[str, str]:
    """Copy ``environ`` (``os.environ`` when ``None``) into a plain dict.

    Values from ``env_file`` are layered underneath: a variable already present
    in the environment always wins. ``os.environ`` itself is never modified.
    """

    base = dict(os.environ if environ is None else environ)
    if env_file is None:
        return base
    merged = read_env_file(env_file)
    merged.update(base)
    return merged


__all__ = ["read_env_file", "snapshot"]
