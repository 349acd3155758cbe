"""
Scalar value codecs for ActivityStreams property values.

Each primitive kind a property can hold (plain strings, IRIs, numbers,
timestamps, durations, ...) is described by a :class:`ValueType`: a pair
of functions converting between the JSON-decoded wire value and the
typed Python value.  ``deserialize`` raises :class:`TypeError` or
:class:`ValueError` when the raw value has the wrong shape; callers that
try several alternatives in turn treat either as "does not match".
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable
from urllib.parse import urlsplit

XSD = "http://www.w3.org/2001/XMLSchema#"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
AS = "https://www.w3.org/ns/activitystreams#"


@dataclass(frozen=True)
class ValueType:
    """Codec for one primitive value kind."""

    name: str
    uri: str
    deserialize: Callable[[Any], Any]
    serialize: Callable[[Any], Any]

    def normalize(self, value: Any) -> Any:
        """Validate *value* and return its canonical typed form.

        Equivalent to a wire round-trip, so anything accepted here is
        guaranteed to survive serialization unchanged.
        """
        return self.deserialize(self.serialize(value))


# ── Strings ────────────────────────────────────────────────────────


def _require_str(value: Any, kind: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{kind} must be a string, got: {type(value).__name__}")
    return value


def _string(value: Any) -> str:
    return _require_str(value, "string")


def _lang_string(value: Any) -> str:
    return _require_str(value, "langString")


def _mime_media_type(value: Any) -> str:
    return _require_str(value, "mimeMediaType")


def _link_relation(value: Any) -> str:
    rel = _require_str(value, "linkRelation")
    # RFC 5988 relation types never contain separators
    if not rel or any(c.isspace() or c == "," for c in rel):
        raise ValueError(f"Invalid link relation: {rel!r}")
    return rel


_BCP47_RE = re.compile(r"^[A-Za-z]{1,8}(-[A-Za-z0-9]{1,8})*$")


def _bcp47(value: Any) -> str:
    tag = _require_str(value, "BCP 47 language tag")
    if not _BCP47_RE.match(tag):
        raise ValueError(f"Invalid BCP 47 language tag: {tag!r}")
    return tag


UNITS = ("cm", "feet", "inches", "km", "m", "miles")


def _units_value(value: Any) -> str:
    unit = _require_str(value, "units")
    if unit not in UNITS:
        raise ValueError(f"Unknown unit {unit!r}. Expected one of: {', '.join(UNITS)}")
    return unit


# ── IRIs ───────────────────────────────────────────────────────────

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_iri(value: Any) -> str:
    """Validate an IRI reference and return it unchanged.

    Absolute and relative references are both accepted.  Rejected:
    non-strings, whitespace or control characters, malformed percent
    escapes, an invalid port, and a missing scheme before ``:``.
    """
    iri = _require_str(value, "IRI")
    if not iri:
        raise ValueError("IRI must not be empty")
    if any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7F for c in iri):
        raise ValueError(f"IRI contains whitespace or control characters: {iri!r}")
    if iri.startswith(":"):
        raise ValueError(f"IRI is missing a scheme: {iri!r}")
    if _BAD_ESCAPE_RE.search(iri):
        raise ValueError(f"IRI contains an invalid percent-escape: {iri!r}")
    # .port raises ValueError on non-numeric or out-of-range ports
    urlsplit(iri).port
    return iri


def parse_absolute_iri(value: Any) -> str:
    """Validate an IRI that names its scheme.

    Used for bare references: plain words such as ``"bob"`` are
    relative references and are rejected here.
    """
    iri = parse_iri(value)
    if not urlsplit(iri).scheme:
        raise ValueError(f"IRI has no scheme: {iri!r}")
    return iri


# ── Numbers ────────────────────────────────────────────────────────


def _float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"float must be a number, got: {type(value).__name__}")
    try:
        result = float(value)
    except OverflowError as exc:
        raise ValueError("float out of range") from exc
    if not math.isfinite(result):
        raise ValueError(f"float must be finite, got: {value!r}")
    return result


def _boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    raise TypeError(f"boolean must be a bool or 0/1, got: {value!r}")


def _non_negative_integer(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(
            f"nonNegativeInteger must be a number, got: {type(value).__name__}"
        )
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValueError(f"nonNegativeInteger must be integral, got: {value!r}")
        value = int(value)
    if value < 0:
        raise ValueError(f"nonNegativeInteger must be >= 0, got: {value}")
    return value


# ── Timestamps ─────────────────────────────────────────────────────

_DATETIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M%z",
)
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def parse_date_time(value: Any) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime."""
    ts = _require_str(value, "dateTime")
    # Normalise trailing Z and sub-microsecond precision for strptime
    normalised = ts[:-1] + "+00:00" if ts.endswith(("Z", "z")) else ts
    normalised = _FRACTION_RE.sub(r".\1", normalised)
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(normalised, fmt)
        except ValueError:
            continue
    raise ValueError(f"Cannot parse dateTime: {ts!r}")


def format_date_time(value: Any) -> str:
    """Format an aware datetime as RFC 3339."""
    if not isinstance(value, datetime):
        raise TypeError(f"dateTime must be a datetime, got: {type(value).__name__}")
    offset = value.utcoffset()
    if offset is None:
        raise ValueError("dateTime must be timezone-aware")
    # strftime does not zero-pad years before 1000 on every platform
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    if offset == timedelta(0):
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


# ── Durations ──────────────────────────────────────────────────────

_DURATION_RE = re.compile(
    r"^(?P<sign>-)?P"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?"
    r")?$"
)

_DAYS_PER_YEAR = 365
_DAYS_PER_MONTH = 30


def parse_duration(value: Any) -> timedelta:
    """Parse an xsd:duration into a timedelta.

    Calendar units are approximated: a year is 365 days and a month
    30 days.
    """
    text = _require_str(value, "duration")
    m = _DURATION_RE.match(text)
    if m is None or text.endswith(("P", "T")):
        raise ValueError(f"Cannot parse duration: {text!r}")
    parts = m.groupdict()
    try:
        result = timedelta(
            days=int(parts["years"] or 0) * _DAYS_PER_YEAR
            + int(parts["months"] or 0) * _DAYS_PER_MONTH
            + int(parts["days"] or 0),
            hours=int(parts["hours"] or 0),
            minutes=int(parts["minutes"] or 0),
            seconds=float(parts["seconds"] or 0),
        )
    except OverflowError as exc:
        raise ValueError(f"Duration out of range: {text!r}") from exc
    return -result if parts["sign"] else result


def format_duration(value: Any) -> str:
    """Format a timedelta as an xsd:duration."""
    if not isinstance(value, timedelta):
        raise TypeError(f"duration must be a timedelta, got: {type(value).__name__}")
    sign = ""
    if value < timedelta(0):
        sign = "-"
        value = -value
    years, days = divmod(value.days, _DAYS_PER_YEAR)
    months, days = divmod(days, _DAYS_PER_MONTH)
    hours, rest = divmod(value.seconds, 3600)
    minutes, seconds = divmod(rest, 60)

    date_part = ""
    if years:
        date_part += f"{years}Y"
    if months:
        date_part += f"{months}M"
    if days:
        date_part += f"{days}D"
    time_part = ""
    if hours:
        time_part += f"{hours}H"
    if minutes:
        time_part += f"{minutes}M"
    if seconds or value.microseconds:
        if value.microseconds:
            time_part += f"{seconds}.{value.microseconds:06d}".rstrip("0") + "S"
        else:
            time_part += f"{seconds}S"
    if not date_part and not time_part:
        return "PT0S"
    return f"{sign}P{date_part}" + (f"T{time_part}" if time_part else "")


# ═══════════════════════════════════════════════════════════════════
# VALUE TYPES
# ═══════════════════════════════════════════════════════════════════

STRING = ValueType("string", XSD + "string", _string, _string)
LANG_STRING = ValueType("lang_string", RDF + "langString", _lang_string, _lang_string)
ANY_URI = ValueType("any_uri", XSD + "anyURI", parse_iri, parse_iri)
IRI = ValueType("iri", "@id", parse_absolute_iri, parse_absolute_iri)
FLOAT = ValueType("float", XSD + "float", _float, _float)
BOOLEAN = ValueType("boolean", XSD + "boolean", _boolean, _boolean)
DATE_TIME = ValueType("date_time", XSD + "dateTime", parse_date_time, format_date_time)
DURATION = ValueType("duration", XSD + "duration", parse_duration, format_duration)
NON_NEGATIVE_INTEGER = ValueType(
    "non_negative_integer",
    XSD + "nonNegativeInteger",
    _non_negative_integer,
    _non_negative_integer,
)
BCP47 = ValueType("bcp47", XSD + "language", _bcp47, _bcp47)
MIME_MEDIA_TYPE = ValueType("mime_media_type", XSD + "string", _mime_media_type, _mime_media_type)
LINK_RELATION = ValueType("link_relation", XSD + "string", _link_relation, _link_relation)
UNITS_VALUE = ValueType("units_value", XSD + "string", _units_value, _units_value)

VALUE_TYPES: dict[str, ValueType] = {
    vt.name: vt
    for vt in (
        STRING, LANG_STRING, ANY_URI, IRI, FLOAT, BOOLEAN, DATE_TIME, DURATION,
        NON_NEGATIVE_INTEGER, BCP47, MIME_MEDIA_TYPE, LINK_RELATION, UNITS_VALUE,
    )
}
