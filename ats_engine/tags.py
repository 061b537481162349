"""Metadata tags: a lossless side-channel for values the classifiers can't map.

Every adapter pushes unrecognized fields here instead of dropping them, so a
record always carries everything the provider sent, even if only as text.
"""

from __future__ import annotations

from typing import Dict, ItemsView, List

from pydantic import Field, RootModel

from .utils import uniq_preserve_order

# Values stored under this key are kept whole (descriptions contain commas).
VERBATIM_KEY = "alternate_descriptions"


class MetadataTagStore(RootModel):
    """Ordered, deduplicated key -> values store.

    Serializes as a plain ``{key: [values]}`` mapping.
    """

    root: Dict[str, List[str]] = Field(default_factory=dict)

    def add(self, key: str, value: str) -> None:
        """Add ``value`` under ``key``.

        Empty key or value is ignored. Unless ``key`` is the verbatim key,
        the value is split on commas and each trimmed part stored separately.
        A (key, value) pair is stored at most once.
        """
        if not key or not value:
            return

        if key == VERBATIM_KEY:
            parts = [value]
        else:
            parts = [p.strip() for p in value.split(",")]

        current = self.root.get(key, [])
        merged = uniq_preserve_order(current + parts)
        if merged:
            self.root[key] = merged

    def get(self, key: str) -> List[str]:
        return list(self.root.get(key, []))

    def items(self) -> ItemsView[str, List[str]]:
        return self.root.items()

    def to_dict(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self.items()}

    def __contains__(self, key: object) -> bool:
        return key in self.root

    def __len__(self) -> int:
        return len(self.root)
