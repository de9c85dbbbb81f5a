"""Optimization checklist normalization and category grouping."""

import logging
from typing import Any, Dict, Iterable, List, Mapping

from report_types import CategoryGroup, ChecklistItem
from scoring import to_number

logger = logging.getLogger(__name__)


def normalize_checklist(raw_items: Iterable[Any]) -> List[ChecklistItem]:
    """Convert raw checklist entries into ChecklistItem, keeping input order.

    Entries that are not objects or have no name are dropped. A missing
    category becomes the empty string; weight and score default to 0.
    """
    items: List[ChecklistItem] = []
    skipped = 0

    for raw in raw_items or ():
        if not isinstance(raw, Mapping):
            skipped += 1
            continue
        name = raw.get('name')
        if name is None or name == '':
            skipped += 1
            continue

        category = raw.get('category')
        items.append(ChecklistItem(
            name=str(name),
            category='' if category is None else str(category),
            weight=to_number(raw.get('weight')),
            score=to_number(raw.get('score')),
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} checklist entries without a name")
    return items


def group_checklist(items: Iterable[ChecklistItem]) -> List[CategoryGroup]:
    """Group checklist items by category.

    Groups appear in order of first occurrence; items keep input order
    within their group. Nothing is sorted.
    """
    groups: Dict[str, CategoryGroup] = {}
    for item in items:
        group = groups.get(item.category)
        if group is None:
            group = groups[item.category] = CategoryGroup(category=item.category)
        group.items.append(item)
    return list(groups.values())
