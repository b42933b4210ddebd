"""Holiday registry parsing and lookup.

The registry is an org-mode style outline. One top-level heading (``*
Feriados`` by default) holds the holidays; every heading nested below it is
an entry whose heading or body contains the ISO date(s) it applies to::

    * Feriados
    ** Día de la Memoria (feriado nacional)
       <2024-03-24 Sun>
    ** Receso invernal
       <2024-07-15 Mon>--<2024-07-26 Fri>

:class:`HolidayResolver` is configured explicitly with the registry location
so several registries (or test fixtures) can coexist in one process.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import requests

_LOG = logging.getLogger(__name__)

DEFAULT_SECTION = "Feriados"

_HEADING_RE = re.compile(r"^(\*+)\s+(.*?)\s*$")
_TAGS_RE = re.compile(r"\s+:[\w@#%:]+:\s*$")
_KEYWORD_RE = re.compile(r"^(?:TODO|DONE)\s+")
_PRIORITY_RE = re.compile(r"^\[#[A-Z]\]\s*")
_TIMESTAMP_RE = re.compile(
    r"\s*[<\[]\d{4}-\d{2}-\d{2}[^>\]]*[>\]](?:--[<\[]\d{4}-\d{2}-\d{2}[^>\]]*[>\]])?"
)
_ISO_DATE_RE = re.compile(r"(?<!\d)(\d{4}-\d{2}-\d{2})(?!\d)")
_RANGE_RE = re.compile(
    r"[<\[](\d{4}-\d{2}-\d{2})[^>\]]*[>\]]--[<\[](\d{4}-\d{2}-\d{2})[^>\]]*[>\]]"
)

_REQUEST_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "User-Agent": "cronograma/1.0 (+holiday-registry)",
}
_REQUEST_TIMEOUT = 12

Source = Union[str, Path]


class RegistryUnavailable(RuntimeError):
    """The holiday registry could not be read."""


class HolidayStatus(enum.Enum):
    HOLIDAY = "holiday"
    REGULAR = "regular"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class HolidayLookup:
    """Outcome of classifying a single date."""

    status: HolidayStatus
    label: Optional[str] = None
    error: Optional[Exception] = None

    @classmethod
    def holiday(cls, label: str) -> "HolidayLookup":
        return cls(HolidayStatus.HOLIDAY, label=label)

    @classmethod
    def regular(cls) -> "HolidayLookup":
        return cls(HolidayStatus.REGULAR)

    @classmethod
    def unknown(cls, error: Exception) -> "HolidayLookup":
        return cls(HolidayStatus.UNKNOWN, error=error)

    @property
    def is_holiday(self) -> bool:
        return self.status is HolidayStatus.HOLIDAY


@dataclass(frozen=True)
class HolidayEntry:
    title: str
    label: str
    dates: Tuple[date, ...]
    line: int = 0


def clean_holiday_label(title: str) -> str:
    """Return ``title`` without its parenthetical suffix.

    ``"Independence Day (observed)"`` becomes ``"Independence Day"``. A title
    that is nothing but a parenthetical is returned stripped instead of empty.
    """
    stripped = (title or "").strip()
    head = stripped.split("(", 1)[0].rstrip()
    return head or stripped


def _clean_heading_title(raw: str) -> str:
    title = _TAGS_RE.sub("", raw)
    title = _KEYWORD_RE.sub("", title)
    title = _PRIORITY_RE.sub("", title)
    title = _TIMESTAMP_RE.sub("", title)
    return title.strip()


def _parse_iso(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _extract_dates(text: str) -> Tuple[date, ...]:
    found: List[date] = []
    for first, last in _RANGE_RE.findall(text):
        start, end = _parse_iso(first), _parse_iso(last)
        if start is None or end is None:
            continue
        current = start
        while current <= end:
            found.append(current)
            current += timedelta(days=1)
    for raw in _ISO_DATE_RE.findall(text):
        parsed = _parse_iso(raw)
        if parsed is not None:
            found.append(parsed)
    # Keep first occurrence order, drop repeats.
    return tuple(dict.fromkeys(found))


@dataclass
class HolidayRegistry:
    """Parsed holiday section of a registry document."""

    entries: List[HolidayEntry] = field(default_factory=list)
    _index: Dict[date, str] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        for entry in self.entries:
            for day in entry.dates:
                kept = self._index.get(day)
                if kept is None:
                    self._index[day] = entry.label
                elif kept != entry.label:
                    _LOG.warning(
                        "Duplicate holiday entries for %s; keeping %r, ignoring %r",
                        day.isoformat(),
                        kept,
                        entry.label,
                    )

    def label_for(self, day: date) -> Optional[str]:
        """Return the label of the first entry covering ``day``, if any."""
        return self._index.get(day)

    def __len__(self) -> int:
        return len(self.entries)


def parse_registry(text: str, section: str = DEFAULT_SECTION) -> HolidayRegistry:
    """Parse the holiday ``section`` out of an outline document.

    A document without that section yields an empty registry.
    """
    wanted = section.strip().casefold()
    entries: List[HolidayEntry] = []
    in_section = False
    section_found = False
    current: Optional[Tuple[str, int, List[str]]] = None

    def _flush() -> None:
        if current is None:
            return
        title, line_no, lines = current
        dates = _extract_dates("\n".join(lines))
        if dates:
            entries.append(
                HolidayEntry(
                    title=title,
                    label=clean_holiday_label(title) or section.strip(),
                    dates=dates,
                    line=line_no,
                )
            )

    if text.startswith("\ufeff"):
        text = text[1:]
    for line_no, line in enumerate(text.splitlines(), start=1):
        match = _HEADING_RE.match(line)
        if match is None:
            if current is not None:
                current[2].append(line)
            continue

        _flush()
        current = None
        level = len(match.group(1))
        title = _clean_heading_title(match.group(2))
        if level == 1:
            in_section = title.casefold() == wanted
            section_found = section_found or in_section
        elif in_section:
            current = (title, line_no, [match.group(2)])

    _flush()
    if not section_found:
        _LOG.debug("No %r section found in holiday registry", section)
    return HolidayRegistry(entries)


def load_registry_text(source: Optional[Source]) -> str:
    """Return the raw registry document from a local path or an HTTP(S) URL.

    Raises
    ------
    RegistryUnavailable
        When no source is configured or the document cannot be read.
    """
    if source is None or not str(source).strip():
        raise RegistryUnavailable("No holiday registry configured")

    location = str(source).strip()
    if location.lower().startswith(("http://", "https://")):
        try:
            resp = requests.get(
                location, timeout=_REQUEST_TIMEOUT, headers=_REQUEST_HEADERS
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise RegistryUnavailable(
                f"Could not download holiday registry from {location}: {exc}"
            ) from exc
        txt = resp.text
        # Sharing/auth pages come back as HTML with a 200 status.
        if "<html" in txt[:512].lower():
            raise RegistryUnavailable(
                f"Expected an outline document at {location}, got HTML"
            )
        return txt

    try:
        return Path(location).expanduser().read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError, RuntimeError, ValueError) as exc:
        raise RegistryUnavailable(
            f"Could not read holiday registry {location}: {exc}"
        ) from exc


class HolidayResolver:
    """Classify dates against one holiday registry.

    The parsed registry (or the load failure) is kept on the instance, so a
    resolver should live for a single schedule run. Call :meth:`refresh` or
    build a new resolver to pick up changes to the document.
    """

    def __init__(
        self,
        source: Optional[Source],
        section: str = DEFAULT_SECTION,
        *,
        strict: bool = False,
    ) -> None:
        self.source = source
        self.section = section
        self.strict = strict
        self._registry: Optional[HolidayRegistry] = None
        self._error: Optional[RegistryUnavailable] = None

    @classmethod
    def from_text(
        cls, text: str, section: str = DEFAULT_SECTION, *, strict: bool = False
    ) -> "HolidayResolver":
        resolver = cls(None, section, strict=strict)
        resolver._registry = parse_registry(text, section)
        return resolver

    def refresh(self) -> None:
        self._registry = None
        self._error = None

    def registry(self) -> HolidayRegistry:
        if self._registry is not None:
            return self._registry
        if self._error is not None:
            raise self._error
        try:
            text = load_registry_text(self.source)
        except RegistryUnavailable as exc:
            _LOG.warning("Holiday registry unavailable: %s", exc)
            self._error = exc
            raise
        self._registry = parse_registry(text, self.section)
        _LOG.debug(
            "Loaded %d holiday entries from %s", len(self._registry), self.source
        )
        return self._registry

    def lookup(self, day: date) -> HolidayLookup:
        """Return the three-state classification of ``day``."""
        try:
            registry = self.registry()
        except RegistryUnavailable as exc:
            if self.strict:
                raise
            return HolidayLookup.unknown(exc)
        label = registry.label_for(day)
        if label is None:
            return HolidayLookup.regular()
        return HolidayLookup.holiday(label)

    def resolve(self, day: date) -> Optional[str]:
        """Return the holiday label for ``day`` or ``None``.

        A registry that cannot be read counts as "no holiday".
        """
        return self.lookup(day).label


class NullResolver:
    """Resolver used when no registry is configured; nothing is a holiday."""

    def lookup(self, day: date) -> HolidayLookup:
        return HolidayLookup.regular()

    def resolve(self, day: date) -> Optional[str]:
        return None


__all__ = [
    "DEFAULT_SECTION",
    "RegistryUnavailable",
    "HolidayStatus",
    "HolidayLookup",
    "HolidayEntry",
    "HolidayRegistry",
    "HolidayResolver",
    "NullResolver",
    "clean_holiday_label",
    "parse_registry",
    "load_registry_text",
]
