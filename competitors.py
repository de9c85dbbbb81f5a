"""Competitor aggregation across model-specific mention lists.

Each model (DeepSeek, Gemini, ChatGPT) reports its own competitor list. The
report shows one table: one row per company name, carrying the highest
mention score any model gave it, ranked by that score.
"""

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from report_types import CompetitorRecord
from scoring import to_number

logger = logging.getLogger(__name__)

# Concatenation order of the sources; also the tie-break order
DEFAULT_SOURCE_ORDER: Tuple[str, ...] = ('ds', 'gm', 'gpt')


def _ordered_sources(
    sources: Mapping[str, Optional[Sequence[Any]]],
    source_order: Sequence[str],
) -> Iterator[Sequence[Any]]:
    """Yield source lists in caller order, then any sources the order omits."""
    for key in source_order:
        yield sources.get(key) or ()
    for key, entries in sources.items():
        if key not in source_order:
            yield entries or ()


def _field(entry: Mapping[str, Any], *keys: str) -> Any:
    """First non-null value among keys."""
    for key in keys:
        value = entry.get(key)
        if value is not None:
            return value
    return None


def _entry_fields(entry: Any) -> Optional[Tuple[str, Optional[str], float]]:
    """Extract (name, domain, score) from a raw entry, or None if unusable."""
    if not isinstance(entry, Mapping):
        return None

    name = _field(entry, 'company_name', 'name')
    if name is None or isinstance(name, bool) or name == '':
        return None

    domain = _field(entry, 'company_domain', 'domain')
    score = to_number(_field(entry, 'company_score', 'score'))
    return str(name), (str(domain) if domain else None), score


def aggregate_competitors(
    sources: Mapping[str, Optional[Sequence[Any]]],
    source_order: Sequence[str] = DEFAULT_SOURCE_ORDER,
) -> list[CompetitorRecord]:
    """Merge competitor lists into one deduplicated, ranked list.

    Names are matched exactly (case-sensitive). A name keeps the domain it was
    first seen with; its score is the maximum seen across all sources.
    The result is sorted by score descending, ties in first-seen order.

    Args:
        sources: model key -> raw entries ({company_name, company_domain?, company_score?})
        source_order: concatenation order of the sources

    Returns:
        List of CompetitorRecord (possibly empty)
    """
    merged: Dict[str, CompetitorRecord] = {}
    skipped = 0

    for entries in _ordered_sources(sources, source_order):
        for entry in entries:
            fields = _entry_fields(entry)
            if fields is None:
                skipped += 1
                continue

            name, domain, score = fields
            current = merged.get(name)
            if current is None:
                merged[name] = CompetitorRecord(name=name, domain=domain, score=score)
            elif score > current.score:
                merged[name] = CompetitorRecord(name=name, domain=current.domain, score=score)

    if skipped:
        logger.debug(f"Skipped {skipped} competitor entries without a usable name")

    # sorted() is stable: equal scores keep first-seen order
    return sorted(merged.values(), key=lambda record: -record.score)
