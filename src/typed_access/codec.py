"""Codecs for timestamps, durations and complex literals."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from fractions import Fraction

from typed_access.errors import DescriptorSyntaxError
from typed_access.literals import parse_float

# Layout presets, keyed by lowercase name. Each preset lists the strptime
# formats tried in order; the extra entries accept fractional seconds.
LAYOUT_PRESETS: dict[str, tuple[str, ...]] = {
    "layout": ("%m/%d %I:%M:%S%p '%y %z",),
    "ansic": ("%a %b %d %H:%M:%S %Y",),
    "unixdate": ("%a %b %d %H:%M:%S %Z %Y",),
    "rubydate": ("%a %b %d %H:%M:%S %z %Y",),
    "rfc822": ("%d %b %y %H:%M %Z",),
    "rfc822z": ("%d %b %y %H:%M %z",),
    "rfc850": ("%A, %d-%b-%y %H:%M:%S %Z",),
    "rfc1123": ("%a, %d %b %Y %H:%M:%S %Z",),
    "rfc1123z": ("%a, %d %b %Y %H:%M:%S %z",),
    "rfc3339": ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z"),
    "rfc3339nano": ("%Y-%m-%dT%H:%M:%S.%f%z", "%Y-%m-%dT%H:%M:%S%z"),
    "kitchen": ("%I:%M%p",),
    "stamp": ("%b %d %H:%M:%S",),
    "stampmilli": ("%b %d %H:%M:%S.%f",),
    "stampmicro": ("%b %d %H:%M:%S.%f",),
    "stampnano": ("%b %d %H:%M:%S.%f",),
    "datetime": ("%Y-%m-%d %H:%M:%S",),
    "dateonly": ("%Y-%m-%d",),
    "timeonly": ("%H:%M:%S",),
}

DEFAULT_LAYOUT = "rfc3339"

# Nanoseconds per duration unit
_DURATION_UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC Greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DURATION_TERM = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION = re.compile(r"([+-]?)((?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:ns|us|µs|μs|ms|s|m|h))+)")

_MAX_DURATION_NS = (1 << 63) - 1


def clone_timestamp(value: datetime) -> datetime:
    """Rebuild an independent timestamp from its components (same instant and offset)."""
    return datetime(
        value.year,
        value.month,
        value.day,
        value.hour,
        value.minute,
        value.second,
        value.microsecond,
        tzinfo=value.tzinfo,
        fold=value.fold,
    )


def clone_duration(value: timedelta) -> timedelta:
    """Rebuild an independent duration from its components."""
    return timedelta(days=value.days, seconds=value.seconds, microseconds=value.microseconds)


def parse_complex(text: str) -> complex:
    """Parse a complex literal written as ``<real>+<imag>i``, e.g. ``3.5+2.7i``."""
    s = text.replace(" ", "")
    if not s:
        raise DescriptorSyntaxError(text, complex)

    parts = s.split("+")
    if len(parts) != 2 or not parts[1].endswith("i"):
        raise DescriptorSyntaxError(text, complex)

    real = parse_float(parts[0])
    imag = parse_float(parts[1][:-1])
    return complex(real, imag)


def parse_duration(text: str) -> timedelta:
    """Parse a duration literal such as ``300ms``, ``-1.5h`` or ``2h30m``.

    Precision below one microsecond is truncated.
    """
    if text in ("0", "+0", "-0"):
        return timedelta(0)

    match = _DURATION.fullmatch(text)
    if match is None:
        raise DescriptorSyntaxError(text, timedelta)
    sign, body = match.groups()

    total = Fraction(0)
    for number, unit in _DURATION_TERM.findall(body):
        total += Fraction(number) * _DURATION_UNITS[unit]
    if total > _MAX_DURATION_NS:
        raise DescriptorSyntaxError(text, timedelta)

    micros = int(total / 1000)
    if sign == "-":
        micros = -micros
    return timedelta(microseconds=micros)


def resolve_layout(name: str) -> tuple[str, ...]:
    """Resolve a preset name (case-insensitive) to strptime formats.

    An empty name selects the default preset; any other unknown name is taken
    to be a strptime format itself.
    """
    if not name:
        return LAYOUT_PRESETS[DEFAULT_LAYOUT]
    preset = LAYOUT_PRESETS.get(name.lower())
    if preset is not None:
        return preset
    return (name,)


def now() -> datetime:
    """Current instant as an offset-aware local timestamp."""
    return datetime.now().astimezone()


def parse_timestamp(text: str, layout: str = "") -> datetime:
    """Parse a timestamp literal against a named or custom layout.

    The literal ``now`` (any case) yields the current instant. A layout
    without offset information yields a UTC timestamp.
    """
    if text.lower() == "now":
        return now()

    for fmt in resolve_layout(layout):
        try:
            value = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
    raise DescriptorSyntaxError(text, datetime)
