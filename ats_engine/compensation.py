"""Compensation summary parsing.

Providers that expose pay as free text use summaries such as
``"$155K - $190K"``, ``"€185K - €317K • Offers Equity"`` or ``"USD$120,000"``.
We pull out the currency marker, the minimum and maximum amounts, and whether
equity is mentioned. Anything that doesn't look like an amount is reported via
``parsed=False`` rather than an exception.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import Equity

if TYPE_CHECKING:
    from .models import JobRecord

logger = logging.getLogger(__name__)

# currency? amount K? ( - currency? amount K? )?
COMPENSATION_RE = re.compile(
    r"([A-Z]*\$|€|£)?\s*\$?(\d[\d.,]*)(K)?"
    r"(?:\s*[–-]\s*([A-Z]*\$|€|£)?\s*\$?(\d[\d.,]*)(K)?)?",
    flags=re.IGNORECASE,
)


@dataclass(frozen=True)
class Compensation:
    currency: str = ""
    min_salary: float = 0.0
    max_salary: float = 0.0
    offers_equity: bool = False
    parsed: bool = False


def _parse_amount(value: str, multiplier: str) -> float:
    if not value:
        return 0.0
    try:
        num = float(value.replace(",", ""))
    except ValueError:
        return 0.0
    if multiplier and multiplier.upper() == "K":
        num *= 1000
    return num


def parse_compensation(text: str) -> Compensation:
    """Parse a compensation summary into currency, min/max and an equity flag.

    ``offers_equity`` only depends on the word "equity" being present, so it
    can be true even when no amount was found.
    """
    text = text or ""
    offers_equity = "equity" in text.lower()

    match = COMPENSATION_RE.search(text)
    if match is None:
        logger.debug("Compensation string did not match: %r", text)
        return Compensation(offers_equity=offers_equity)

    first_currency, first_amount, first_k, second_currency, second_amount, second_k = match.groups()

    min_salary = _parse_amount(first_amount, first_k)
    max_salary = _parse_amount(second_amount, second_k)
    if not max_salary:
        max_salary = min_salary

    currency = (first_currency or second_currency or "").strip()

    return Compensation(
        currency=currency,
        min_salary=min_salary,
        max_salary=max_salary,
        offers_equity=offers_equity,
        parsed=True,
    )


def apply_compensation(record: "JobRecord", text: str) -> Compensation:
    """Parse ``text`` and copy whatever was understood onto ``record``."""
    comp = parse_compensation(text)
    if comp.parsed:
        record.min_compensation = comp.min_salary
        record.max_compensation = comp.max_salary
        if comp.currency:
            record.compensation_unit = comp.currency
    else:
        logger.debug("Unable to parse compensation for %s job %s: %r", record.source, record.source_id, text)
    if comp.offers_equity:
        record.equity = Equity.OFFERED
    return comp
