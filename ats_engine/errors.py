"""Exceptions raised by source adapters.

Classification and parsing never raise; only structural problems with a
whole payload (or an unknown adapter name) surface as exceptions.
"""

from __future__ import annotations


class AtsEngineError(Exception):
    """Base class for engine errors."""


class PayloadError(AtsEngineError):
    """A provider payload is not valid JSON or does not have the expected shape."""


class UnknownSourceError(AtsEngineError, KeyError):
    """No adapter is registered under the requested name."""
