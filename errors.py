# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every failure raised by the machine core."""


class AlphabetError(EnigmaError):
    """Empty / duplicate character set, or a lookup outside the alphabet."""


class ConfigurationError(EnigmaError):
    """Bad machine description, rotor assignment, settings or cycles."""


class ConversionError(EnigmaError):
    """Conversion attempted on a machine that is not fully set up."""


__all__ = [
    "EnigmaError",
    "AlphabetError",
    "ConfigurationError",
    "ConversionError",
]
