"""Enums for option valuation."""

from enum import Enum

__all__ = [
    "OptionType",
]


class OptionType(Enum):
    CALL = "call"
    PUT = "put"
