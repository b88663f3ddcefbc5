# /app/services/risk_helpers/classification.py

from typing import Dict, List, Tuple

from ...models.risk_model import WarningLevel

# Upper bound (inclusive) of each tier's score band. Anything above the last
# bound is Severe.
TIER_UPPER_BOUNDS: List[Tuple[int, WarningLevel]] = [
    (3, WarningLevel.SAFE),
    (7, WarningLevel.MILD),
    (12, WarningLevel.MODERATE),
]

TIER_SUGGESTIONS: Dict[WarningLevel, List[str]] = {
    WarningLevel.SAFE: ["Continue current performance"],
    WarningLevel.MILD: ["Meet academic advisor", "Create improvement plan"],
    WarningLevel.MODERATE: [
        "Mandatory meeting with academic advisor",
        "Attend remedial classes",
        "Submit improvement timeline",
    ],
    WarningLevel.SEVERE: [
        "Immediate meeting with department head",
        "Strict monitoring required",
        "Parent/Guardian notification",
        "Academic probation consideration",
    ],
}


def classify(risk_score: int) -> WarningLevel:
    """Maps a final (post-bonus) risk score to its warning tier."""
    for upper_bound, level in TIER_UPPER_BOUNDS:
        if risk_score <= upper_bound:
            return level
    return WarningLevel.SEVERE


def is_at_risk(level) -> bool:
    return WarningLevel(level) != WarningLevel.SAFE
