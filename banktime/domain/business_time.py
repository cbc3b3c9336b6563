"""
BusinessTime - a timezone-aware instant with banking-calendar semantics.

A BusinessTime owns a ``pendulum.DateTime`` and delegates the usual temporal
accessors and comparisons to it. On top of that it knows about weekends,
observed US federal holidays and banking-day arithmetic, and it encodes to
and decodes from RFC 3339 text.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from functools import total_ordering
from typing import Any

import pendulum
from pendulum import DateTime
from pydantic_core import core_schema

from . import holidays
from .exceptions import ParseError


logger = logging.getLogger(__name__)


BANKING_TIMEZONE = "America/New_York"

# 0001-01-01T00:00:00Z, the earliest instant a datetime can hold
ZERO_INSTANT: DateTime = pendulum.datetime(1, 1, 1, tz="UTC")

_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)

_WEEKEND = (pendulum.SATURDAY, pendulum.SUNDAY)


def _to_instant(value: datetime) -> DateTime:
    """Coerce any datetime to a pendulum DateTime, clamping to the zero instant."""
    instant = pendulum.instance(value)
    if instant <= ZERO_INSTANT:
        if instant < ZERO_INSTANT:
            logger.debug("Normalizing negative instant %s to the zero time", value)
        return ZERO_INSTANT
    return instant


def _is_banking_date(instant: DateTime) -> bool:
    if instant.day_of_week in _WEEKEND:
        return False
    return not holidays.is_holiday(instant.date())


@total_ordering
@dataclass(frozen=True, eq=False)
class BusinessTime:
    """
    Immutable wrapper around a timezone-aware instant.

    Invariant: the wrapped instant is never earlier than ``ZERO_INSTANT``.
    Anything at or before it collapses to the zero time.

    Construct values with :meth:`lift` (converts to the banking timezone) or
    :meth:`now`. ``BusinessTime()`` is the zero time.
    """
    instant: DateTime = ZERO_INSTANT

    def __post_init__(self):
        value = self.instant if self.instant is not None else ZERO_INSTANT
        object.__setattr__(self, "instant", _to_instant(value))

    @classmethod
    def lift(cls, value: datetime | BusinessTime | None, tz: str | None = None) -> BusinessTime:
        """
        Wrap a timestamp, converting it to the banking timezone.

        Instants at or before the zero time become the zero time. An instant
        that would leave the representable range once converted (early year 1
        in a zone behind UTC) is kept in its original zone. Naive datetimes
        are read as UTC.

        Args:
            value: Timestamp to wrap
            tz: Target timezone name, defaults to ``BANKING_TIMEZONE``

        Returns:
            BusinessTime instance

        Raises:
            pendulum.tz.exceptions.InvalidTimezone: If ``tz`` is not a known zone
        """
        if value is None:
            return cls()
        if isinstance(value, BusinessTime):
            value = value.instant

        zone = pendulum.timezone(tz or BANKING_TIMEZONE)
        instant = _to_instant(value)
        if instant == ZERO_INSTANT:
            return cls()

        try:
            return cls(instant.in_timezone(zone))
        except (OverflowError, ValueError):
            # converted wall clock would fall before year 1
            logger.debug("Keeping %s in its own zone, %s is out of range", value, zone.name)
            return cls(instant)

    @classmethod
    def now(cls, tz: str | None = None) -> BusinessTime:
        """Current instant in the banking (or given) timezone."""
        return cls.lift(pendulum.now(tz or BANKING_TIMEZONE), tz=tz)

    # Calendar predicates

    def is_zero(self) -> bool:
        """Check if this is the zero time."""
        return self.instant == ZERO_INSTANT

    def is_weekend(self) -> bool:
        """Saturday or Sunday in the value's own timezone."""
        return self.instant.day_of_week in _WEEKEND

    def is_holiday(self) -> bool:
        """Check if the value's calendar date is an observed federal holiday."""
        return holidays.is_holiday(self.instant.date())

    def holiday_name(self) -> str | None:
        """Name of the holiday observed on this date, if any."""
        return holidays.holiday_name(self.instant.date())

    def is_banking_day(self) -> bool:
        """Neither a weekend nor an observed holiday."""
        return _is_banking_date(self.instant)

    # Arithmetic

    def add_banking_day(self, n: int) -> BusinessTime:
        """
        Move forward (or backward, for negative n) by n banking days.

        Steps one calendar day at a time and only counts days that are banking
        days. The wall-clock time and the timezone are kept. ``n == 0``
        returns the value unchanged, banking day or not.

        Stepping outside the representable date range yields the zero time.
        """
        if n == 0:
            return self

        step = 1 if n > 0 else -1
        remaining = abs(n)
        instant = self.instant

        while remaining:
            try:
                instant = instant.add(days=step)
            except (OverflowError, ValueError):
                logger.debug("Banking-day step from %s left the date range", self.instant)
                return BusinessTime()
            if _is_banking_date(instant):
                remaining -= 1

        return BusinessTime(instant)

    def next_banking_day(self) -> BusinessTime:
        """This value if it is a banking day, otherwise the following banking day."""
        if self.is_banking_day():
            return self
        return self.add_banking_day(1)

    def previous_banking_day(self) -> BusinessTime:
        """This value if it is a banking day, otherwise the preceding banking day."""
        if self.is_banking_day():
            return self
        return self.add_banking_day(-1)

    def in_timezone(self, tz: str) -> BusinessTime:
        """Same instant expressed in another timezone."""
        return BusinessTime.lift(self.instant, tz=tz)

    # Delegated accessors

    @property
    def year(self) -> int:
        """Year in the value's own timezone."""
        return self.instant.year

    @property
    def month(self) -> int:
        """Month in the value's own timezone."""
        return self.instant.month

    @property
    def day(self) -> int:
        """Day in the value's own timezone."""
        return self.instant.day

    @property
    def hour(self) -> int:
        """Hour in the value's own timezone."""
        return self.instant.hour

    @property
    def minute(self) -> int:
        """Minute of the hour."""
        return self.instant.minute

    @property
    def second(self) -> int:
        """Second of the minute."""
        return self.instant.second

    @property
    def microsecond(self) -> int:
        """Microsecond of the second."""
        return self.instant.microsecond

    @property
    def tzinfo(self) -> tzinfo | None:
        """Timezone of the wrapped instant."""
        return self.instant.tzinfo

    @property
    def timezone_name(self) -> str | None:
        """IANA name of the timezone, e.g. America/New_York."""
        return self.instant.timezone_name

    @property
    def day_of_week(self) -> int:
        """0=Monday, 6=Sunday."""
        return self.instant.day_of_week

    def date(self) -> date:
        """Calendar date in the value's own timezone."""
        return self.instant.date()

    # Comparison

    def before(self, other: BusinessTime | datetime) -> bool:
        """Check if this value is strictly earlier than ``other``."""
        return self.instant < _unwrap(other)

    def after(self, other: BusinessTime | datetime) -> bool:
        """Check if this value is strictly later than ``other``."""
        return self.instant > _unwrap(other)

    def equal(self, other: BusinessTime | datetime) -> bool:
        """Same instant, regardless of the timezone each side is expressed in."""
        return self.instant == _unwrap(other)

    def sub(self, other: BusinessTime | datetime) -> timedelta:
        """Elapsed time from ``other`` to this value."""
        return self.instant - _unwrap(other)

    # Operators take BusinessTime only; equal/before/after also accept datetimes.

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BusinessTime):
            return NotImplemented
        return self.equal(other)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, BusinessTime):
            return NotImplemented
        return self.before(other)

    def __hash__(self) -> int:
        # same instant in any zone hashes alike
        return hash(self.instant.timestamp())

    def __add__(self, other: Any) -> BusinessTime:
        if not isinstance(other, timedelta):
            return NotImplemented
        return BusinessTime(self.instant + other)

    def __sub__(self, other: Any) -> BusinessTime | timedelta:
        if isinstance(other, timedelta):
            return BusinessTime(self.instant - other)
        if isinstance(other, (BusinessTime, datetime)):
            return self.sub(other)
        return NotImplemented

    def __str__(self) -> str:
        return self.instant.format("YYYY-MM-DD HH:mm:ss ZZ zz")

    # Text encoding

    def isoformat(self) -> str:
        """RFC 3339 representation, ``Z`` for a zero UTC offset."""
        text = self.instant.isoformat()
        if text.endswith("+00:00"):
            text = text[: -len("+00:00")] + "Z"
        return text

    def marshal_text(self) -> bytes:
        """RFC 3339 text as UTF-8 bytes."""
        return self.isoformat().encode("utf-8")

    @classmethod
    def unmarshal_text(cls, data: bytes | str) -> BusinessTime:
        """
        Decode RFC 3339 text.

        Empty input (or an empty quoted string) decodes to the zero time.

        Raises:
            ParseError: If the text is not an RFC 3339 timestamp with offset
        """
        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ParseError(repr(data), "not valid UTF-8") from exc

        text = data.strip()
        if len(text) >= 2 and text[0] == text[-1] == '"':
            text = text[1:-1]
        if not text:
            return cls()

        if not _RFC3339_PATTERN.match(text):
            raise ParseError(text)
        if text.startswith("0000-"):
            # all-zero dates from fixed-width banking files
            logger.debug("Normalizing year-zero timestamp %s to the zero time", text)
            return cls()

        try:
            parsed = pendulum.parse(text)
        except ValueError as exc:
            raise ParseError(text, str(exc)) from exc

        return cls.lift(parsed)

    def marshal_json(self) -> bytes:
        """RFC 3339 text as a JSON string value."""
        return json.dumps(self.isoformat()).encode("utf-8")

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> BusinessTime:
        """Decode a JSON string value; ``""`` and ``null`` leave the value unset."""
        try:
            value = json.loads(data)
        except ValueError as exc:
            raise ParseError(data if isinstance(data, str) else repr(data), "invalid JSON") from exc

        if value is None:
            return cls()
        if not isinstance(value, str):
            raise ParseError(repr(value), "expected a JSON string")
        return cls.unmarshal_text(value)

    # pydantic integration

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                BusinessTime.isoformat,
                when_used="always",
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> BusinessTime:
        if isinstance(value, BusinessTime):
            return value
        if isinstance(value, datetime):
            return cls.lift(value)
        if value is None:
            return cls()
        if isinstance(value, (str, bytes, bytearray)):
            return cls.unmarshal_text(value)
        raise ValueError(f"cannot interpret {value!r} as a BusinessTime")


def _unwrap(other: BusinessTime | datetime) -> datetime:
    if isinstance(other, BusinessTime):
        return other.instant
    return other
