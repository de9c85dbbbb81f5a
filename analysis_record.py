"""
Analysis Record - tolerant parsing of the analysis workflow response

The analysis webhook returns loosely structured JSON:

    {
      "pointAverage": 7.5, "pointDS": 6, "pointGM": "8.25", "pointGPT": 7,
      "competitor_listDP": [{"company_name": "...", "company_domain": "...", "company_score": 3}],
      "competitor_listGM": [...],
      "competitor_listGPT": [...],
      "checklist": [{"name": "...", "category": "...", "weight": 0.2, "score": 1}]
    }

Any field may be missing, lists may be null, and some flows wrap the whole
object in a single-element array. AnalysisPayload accepts all of that;
AnalysisRecord is the immutable, normalized form the report modules consume.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from checklist import normalize_checklist
from report_types import ChecklistItem
from scoring import to_number

logger = logging.getLogger(__name__)

# Wire field -> model key
SCORE_FIELDS: Dict[str, str] = {
    'pointAverage': 'average',
    'pointDS': 'ds',
    'pointGM': 'gm',
    'pointGPT': 'gpt',
}

# Wire order of the competitor lists (DeepSeek, Gemini, ChatGPT)
COMPETITOR_FIELDS: Dict[str, str] = {
    'competitor_listDP': 'ds',
    'competitor_listGM': 'gm',
    'competitor_listGPT': 'gpt',
}


class AnalysisPayload(BaseModel):
    """Wire shape of one analysis result. Unknown fields are ignored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    point_average: Any = Field(None, alias="pointAverage")
    point_ds: Any = Field(None, alias="pointDS")
    point_gm: Any = Field(None, alias="pointGM")
    point_gpt: Any = Field(None, alias="pointGPT")
    competitor_list_dp: List[Any] = Field(default_factory=list, alias="competitor_listDP")
    competitor_list_gm: List[Any] = Field(default_factory=list, alias="competitor_listGM")
    competitor_list_gpt: List[Any] = Field(default_factory=list, alias="competitor_listGPT")
    checklist: List[Any] = Field(default_factory=list)

    @field_validator(
        "competitor_list_dp", "competitor_list_gm", "competitor_list_gpt", "checklist",
        mode="before",
    )
    @classmethod
    def _coerce_list(cls, value: Any) -> List[Any]:
        if isinstance(value, (list, tuple)):
            return list(value)
        return []


def normalize_response(data: Any) -> Dict[str, Any]:
    """Unwrap array responses and return the result object ({} when unusable)."""
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, Mapping):
        return dict(data)
    return {}


def has_scores(data: Any) -> bool:
    """True when the response carries at least one point* score field."""
    result = normalize_response(data)
    return any(key in result for key in SCORE_FIELDS)


@dataclass(frozen=True)
class AnalysisRecord:
    """Normalized analysis input. Built once per response and never mutated."""
    scores: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    competitor_sources: Mapping[str, Tuple[Any, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    checklist: Tuple[ChecklistItem, ...] = ()

    def score(self, key: str) -> float:
        """Score for a model key; absent keys count as 0."""
        return self.scores.get(key, 0.0)

    @classmethod
    def from_payload(
        cls, payload: Union[AnalysisPayload, Mapping[str, Any], List[Any], None]
    ) -> "AnalysisRecord":
        """Build a record from a payload model or raw response JSON."""
        if not isinstance(payload, AnalysisPayload):
            payload = AnalysisPayload.model_validate(normalize_response(payload))

        wire = payload.model_dump(by_alias=True)

        scores = {
            key: to_number(wire[wire_field])
            for wire_field, key in SCORE_FIELDS.items()
            if wire.get(wire_field) is not None
        }
        sources = {
            key: tuple(wire[wire_field])
            for wire_field, key in COMPETITOR_FIELDS.items()
        }
        checklist = tuple(normalize_checklist(wire["checklist"]))

        logger.debug(
            f"Analysis record: {len(scores)} scores, "
            f"{sum(len(s) for s in sources.values())} competitor entries, "
            f"{len(checklist)} checklist items"
        )

        return cls(
            scores=MappingProxyType(scores),
            competitor_sources=MappingProxyType(sources),
            checklist=checklist,
        )
