"""
Configuration and logging setup.

Settings are read from environment variables prefixed with ``SENSITIVITY_``:

- ``SENSITIVITY_INCLUDE_ACCRUED_ON_DEFAULT``: include premium accrued at
  default in CDS fee legs (default: true).
- ``SENSITIVITY_CENTRAL_DIFFERENCE``: default finite-difference mode for the
  Greeks façade (default: true).
- ``SENSITIVITY_DEFAULT_BUMP_BP``: default absolute bump in basis points
  (default: 1.0).
- ``SENSITIVITY_LOG_LEVEL``: level used by `configure_logging` (default: WARNING).

A config is never read implicitly from module state by pricing formulas: each
pricer carries its own `config`, and `config_override` swaps it for a scoped
block.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any

_ENV_PREFIX = "SENSITIVITY_"
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(key: str, default: str) -> str:
    return os.environ.get(_ENV_PREFIX + key, default)


@dataclass(frozen=True)
class SensitivityConfig:
    """Explicit settings passed to pricers and the Greeks façade."""

    include_accrued_on_default: bool = True
    central_difference: bool = True
    default_bump_bp: float = 1.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "SensitivityConfig":
        """Build a config from ``SENSITIVITY_*`` environment variables."""
        try:
            bump_bp = float(_env("DEFAULT_BUMP_BP", "1.0"))
        except ValueError as exc:
            raise ValueError(
                f"{_ENV_PREFIX}DEFAULT_BUMP_BP must be a number, got {_env('DEFAULT_BUMP_BP', '')!r}"
            ) from exc
        return cls(
            include_accrued_on_default=_env("INCLUDE_ACCRUED_ON_DEFAULT", "true").lower() in _TRUE_VALUES,
            central_difference=_env("CENTRAL_DIFFERENCE", "true").lower() in _TRUE_VALUES,
            default_bump_bp=bump_bp,
            log_level=_env("LOG_LEVEL", "WARNING").upper(),
        )


@contextmanager
def config_override(pricer: Any, **changes: Any) -> Iterator[SensitivityConfig]:
    """
    Temporarily replace `pricer.config` with a copy carrying `changes`.

    The previous config is put back on every exit path, and the pricer is
    reset on both sides so cached state never outlives the override.
    """
    saved = pricer.config
    pricer.config = replace(saved, **changes)
    pricer.reset()
    try:
        yield pricer.config
    finally:
        pricer.config = saved
        pricer.reset()


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging once for scripts and demos."""
    if level is None:
        level = SensitivityConfig.from_env().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
