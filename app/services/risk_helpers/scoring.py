# /app/services/risk_helpers/scoring.py

"""
The scorer: turns one academic record, its history and a class aggregate into
a risk score, a warning tier and a list of suggested actions.

Everything here is a pure function. Persisting the outcome and bumping the
cohort's at-risk counter are left to `risk_service`.
"""

from typing import List, Optional, Sequence
from pydantic import BaseModel, Field

from ...models.risk_model import WarningLevel, ClassAggregate, AnalysisResult
from .rules import evaluate_rules, RULE_SUGGESTIONS
from .classification import classify, is_at_risk, TIER_SUGGESTIONS

TREND_BONUS = 3
TREND_MESSAGE = "Continuous poor performance in last 2 semesters"
TREND_SUGGESTIONS = ["Immediate intervention required", "Meet HOD for academic plan"]


class ScoreBreakdown(BaseModel):
    risk_score: int = Field(..., ge=0)
    warning_count: int = Field(..., ge=0)
    warning_level: WarningLevel
    failed_parameters: List[str] = Field(default_factory=list)
    suggested_actions: List[str] = Field(default_factory=list)
    trend_bonus: int = 0


def has_continuous_poor_performance(history: Sequence) -> bool:
    """True when the last two history entries exist and are both non-Safe."""
    last_two = list(history)[-2:]
    if len(last_two) < 2:
        return False
    return all(is_at_risk(entry.warningLevel) for entry in last_two)


def _dedupe(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


def score_student(record, history: Sequence = (), aggregate: Optional[ClassAggregate] = None) -> ScoreBreakdown:
    triggered = evaluate_rules(record, aggregate)

    risk_score = sum(rule.weight for rule in triggered)
    failed_parameters = [rule.message for rule in triggered]
    suggested_actions: List[str] = []
    for rule in triggered:
        suggested_actions.extend(RULE_SUGGESTIONS.get(rule.name, []))

    trend_bonus = 0
    if has_continuous_poor_performance(history):
        trend_bonus = TREND_BONUS
        failed_parameters.append(TREND_MESSAGE)
        suggested_actions.extend(TREND_SUGGESTIONS)
    risk_score += trend_bonus

    warning_level = classify(risk_score)
    suggested_actions.extend(TIER_SUGGESTIONS[warning_level])

    return ScoreBreakdown(
        risk_score=risk_score,
        warning_count=len(triggered),
        warning_level=warning_level,
        failed_parameters=failed_parameters,
        suggested_actions=_dedupe(suggested_actions),
        trend_bonus=trend_bonus,
    )


def to_analysis_result(breakdown: ScoreBreakdown, aggregate: ClassAggregate) -> AnalysisResult:
    return AnalysisResult(
        riskScore=breakdown.risk_score,
        warningCount=breakdown.warning_count,
        warningLevel=breakdown.warning_level,
        failedParameters=list(breakdown.failed_parameters),
        suggestedActions=list(breakdown.suggested_actions),
        classAverages=aggregate,
    )
