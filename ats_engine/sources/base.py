"""Base classes for source adapters.

An adapter owns exactly one provider's JSON shape. ``parse_job`` is pure: it
maps each field of a payload onto the shared classifiers/parsers and tags any
field it doesn't recognize. The fetch methods are thin HTTP wrappers on top.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from ..errors import PayloadError
from ..models import JobRecord

logger = logging.getLogger(__name__)


def load_payload(data: Union[Dict[str, Any], str, bytes]) -> Dict[str, Any]:
    """Decode a payload to a dict, raising PayloadError for anything else."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as exc:
            raise PayloadError(f"payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadError(f"expected a JSON object, got {type(data).__name__}")
    return data


def dig(data: Dict[str, Any], *path: str) -> Any:
    """Follow ``path`` through nested dicts; None if any step is missing."""
    cur: Any = data
    for key in path:
        if not isinstance(cur, dict):
            return None
        cur = cur.get(key)
    return cur


def as_list(record: JobRecord, field: str, value: Any) -> List[Any]:
    """Return ``value`` if it is a list, else log and return [] (field-scoped failure)."""
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("%s job %s: expected a list for %r, got %s", record.source, record.source_id, field, type(value).__name__)
        return []
    return value


class SourceAdapter(ABC):
    """Abstract base class for an ATS provider adapter."""

    name: str

    @abstractmethod
    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        """Normalize one job payload into a JobRecord."""
        raise NotImplementedError

    @abstractmethod
    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        """Fetch and normalize every job a company has posted on this ATS."""
        raise NotImplementedError

    @abstractmethod
    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        """Fetch and normalize a single job."""
        raise NotImplementedError

    def _parse_many(self, items: Any, limit: Optional[int] = None) -> List[JobRecord]:
        """Parse a list of job payloads, skipping (and logging) any that fail."""
        out: List[JobRecord] = []
        if not isinstance(items, list):
            raise PayloadError(f"{self.name}: expected a list of jobs, got {type(items).__name__}")
        for item in items:
            if limit is not None and len(out) >= limit:
                break
            try:
                out.append(self.parse_job(item))
            except PayloadError as exc:
                logger.error("%s: skipping job: %s", self.name, exc)
        return out
