# ABOUTME: Report type definitions shared by the aggregation, grouping and layout modules
# ABOUTME: Defines derived records (competitors, checklist groups) and report errors

from dataclasses import dataclass, field
from typing import Any, Optional

from scoring import format_score, is_passing


@dataclass(frozen=True)
class CompetitorRecord:
    """One deduplicated competitor across all model sources."""
    name: str
    domain: Optional[str]
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "domain": self.domain,
            "score": self.score,
            "scoreDisplay": format_score(self.score),
        }


@dataclass(frozen=True)
class ChecklistItem:
    """Single optimization recommendation."""
    name: str
    category: str
    weight: float
    score: float

    @property
    def passed(self) -> bool:
        return is_passing(self.score)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "weight": self.weight,
            "weightDisplay": format_score(self.weight),
            "score": self.score,
            "passed": self.passed,
        }


UNCATEGORIZED_LABEL = "Uncategorized"


def category_label(category: str) -> str:
    """Display label for a checklist category (empty bucket gets a name)."""
    return category if category else UNCATEGORIZED_LABEL


@dataclass
class CategoryGroup:
    """Checklist items sharing a category, in input order."""
    category: str
    items: list[ChecklistItem] = field(default_factory=list)

    @property
    def label(self) -> str:
        return category_label(self.category)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "label": self.label,
            "items": [item.to_dict() for item in self.items],
        }


class ReportError(Exception):
    """Base report error."""
    pass


class ExportError(ReportError):
    """Rendering or delivery of a composed report failed."""
    def __init__(self, message: str, backend: str = "", is_retryable: bool = False):
        super().__init__(message)
        self.backend = backend
        self.is_retryable = is_retryable
