"""Scoring Module - AIRO score normalization

Every score shown on screen or printed in the PDF goes through this module,
so all of them share the same precision.

Upstream payloads are produced by an external analysis workflow and are not
under our control:
- Scores may be numbers, numeric strings, null or missing entirely
- Mention scores are usually integers but occasionally floats
- Checklist scores are only used as a pass/fail signal (score > 0)

Nothing in here raises. Anything that cannot be read as a finite number
counts as 0.
"""

import math
from typing import Any, Dict, Tuple


# Display labels per model key, used by score chips and the view model
MODEL_LABELS: Dict[str, str] = {
    'average': 'AIRO',
    'gpt': 'ChatGPT',
    'gm': 'Gemini',
    'ds': 'DeepSeek',
}

# Order in which score chips appear in the exported document
CHIP_ORDER: Tuple[str, ...] = ('average', 'gpt', 'gm', 'ds')

# Models with their own breakdown score (the average is reported separately)
PER_MODEL_KEYS: Tuple[str, ...] = ('ds', 'gm', 'gpt')


def to_number(value: Any) -> float:
    """Coerce an arbitrary score field to a finite float.

    Args:
        value: number, numeric string, bool, None or anything else

    Returns:
        The numeric value, or 0.0 when missing, non-numeric or not finite.
    """
    if value is None:
        return 0.0

    if isinstance(value, bool):
        return 1.0 if value else 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0

    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def format_score(value: Any) -> str:
    """Format a score with exactly two decimals ("7.5" -> "7.50", None -> "0.00")."""
    formatted = f"{to_number(value):.2f}"
    # -0.001 rounds to "-0.00"
    if formatted == "-0.00":
        return "0.00"
    return formatted


def is_passing(score: Any) -> bool:
    """Binary checklist status."""
    return to_number(score) > 0
