"""Per-provider adapters, looked up by name."""

from __future__ import annotations

from typing import Dict, Type

from ..errors import UnknownSourceError
from .ashby import AshbySource
from .bamboo import BambooSource
from .base import SourceAdapter
from .gem import GemSource
from .greenhouse import GreenhouseSource
from .lever import LeverSource
from .rippling import RipplingSource
from .workable import WorkableSource

SOURCES: Dict[str, Type[SourceAdapter]] = {
    cls.name: cls
    for cls in (
        AshbySource,
        BambooSource,
        GemSource,
        GreenhouseSource,
        LeverSource,
        RipplingSource,
        WorkableSource,
    )
}


def get_source(name: str, **kwargs) -> SourceAdapter:
    """Instantiate the adapter registered as ``name`` (case-insensitive)."""
    try:
        cls = SOURCES[(name or "").strip().lower()]
    except KeyError:
        raise UnknownSourceError(f"unknown ATS {name!r}; expected one of {sorted(SOURCES)}") from None
    return cls(**kwargs)


__all__ = ["SOURCES", "SourceAdapter", "get_source"]
