"""Runtime configuration for schedule generation.

Values come from environment variables first, then ``st.secrets`` (so the
Streamlit deployment can keep them in ``secrets.toml``), then the defaults
below. Nothing here is global mutable state: callers get a
:class:`ScheduleSettings` and build resolvers from it explicitly.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import streamlit as st
from streamlit.errors import StreamlitAPIException

from .holidays import DEFAULT_SECTION, HolidayResolver

_LOG = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_HOLIDAYS_PATH = PROJECT_ROOT / "data" / "feriados.org"

HOLIDAYS_ENV = "CRONOGRAMA_HOLIDAYS"
SECTION_ENV = "CRONOGRAMA_HOLIDAYS_SECTION"
REPEAT_MONTH_ENV = "CRONOGRAMA_REPEAT_MONTH"

_TRUTHY = {"1", "true", "yes", "on", "si", "sí"}


def _lookup_secret(*keys: str) -> Union[str, bool, int, None]:
    """Return the first matching value from ``st.secrets`` for ``keys``."""

    secrets = getattr(st, "secrets", None)
    if secrets is None:
        return None
    for key in keys:
        try:
            if key in secrets:  # type: ignore[operator]
                return secrets[key]
        except (FileNotFoundError, StreamlitAPIException):
            _LOG.debug("No Streamlit secrets configured; skipping %s", key)
            return None
        except TypeError:  # pragma: no cover - defensive for custom secrets
            value = getattr(secrets, key, None)
            if value is not None:
                return value
    return None


def _setting(env_name: str, *secret_keys: str) -> Union[str, bool, int, None]:
    raw = os.getenv(env_name)
    if raw not in (None, ""):
        return raw
    return _lookup_secret(env_name, *secret_keys)


def _coerce_bool(raw: Union[str, bool, int, None], default: bool = False) -> bool:
    if raw in (None, ""):
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ScheduleSettings:
    holidays_source: Optional[str]
    holidays_section: str = DEFAULT_SECTION
    repeat_month: bool = False

    def make_resolver(self, *, strict: bool = False) -> HolidayResolver:
        """Return a fresh resolver for one schedule run."""
        return HolidayResolver(
            self.holidays_source, self.holidays_section, strict=strict
        )


def load_settings() -> ScheduleSettings:
    """Resolve :class:`ScheduleSettings` from env vars, secrets and defaults."""

    source = _setting(HOLIDAYS_ENV, "holidays_source")
    section = _setting(SECTION_ENV, "holidays_section")
    repeat = _setting(REPEAT_MONTH_ENV, "repeat_month")

    return ScheduleSettings(
        holidays_source=str(source) if source else str(DEFAULT_HOLIDAYS_PATH),
        holidays_section=str(section).strip() if section else DEFAULT_SECTION,
        repeat_month=_coerce_bool(repeat),
    )


__all__ = [
    "DEFAULT_HOLIDAYS_PATH",
    "HOLIDAYS_ENV",
    "SECTION_ENV",
    "REPEAT_MONTH_ENV",
    "ScheduleSettings",
    "load_settings",
]
