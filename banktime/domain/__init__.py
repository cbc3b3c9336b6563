"""
Domain layer - calendar rules and the BusinessTime value type.
"""

from .business_time import BANKING_TIMEZONE, ZERO_INSTANT, BusinessTime
from .exceptions import BankTimeError, ConfigError, ParseError
from .holidays import US_FEDERAL_HOLIDAYS, holidays_for_year, is_holiday, observed_holidays

__all__ = [
    "BANKING_TIMEZONE",
    "ZERO_INSTANT",
    "BusinessTime",
    "BankTimeError",
    "ConfigError",
    "ParseError",
    "US_FEDERAL_HOLIDAYS",
    "holidays_for_year",
    "is_holiday",
    "observed_holidays",
]
