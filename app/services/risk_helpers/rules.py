# /app/services/risk_helpers/rules.py

"""
The fixed, ordered rule table the scorer evaluates.

Each rule is a pure predicate over (academic record, class aggregate). The
table order is the order triggered messages appear in every analysis result,
so new rules must be appended, never inserted.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Rule:
    name: str
    check: Callable[[Any, Optional[Any]], bool]
    weight: int
    message: str


def _class_average_reward_points(aggregate) -> float:
    # A missing aggregate compares as zero, so the rule can never fire.
    if aggregate is None:
        return 0
    return getattr(aggregate, "averageRewardPoints", 0) or 0


RULES: Tuple[Rule, ...] = (
    Rule("attendance", lambda r, a: r.attendancePercentage < 80, 2, "Attendance below 80%"),
    Rule("periodicalTest", lambda r, a: r.periodicalTestMarks < 25, 2, "Periodical test marks below 25/50"),
    Rule("standingArrears", lambda r, a: bool(r.standingArrears), 3, "Has standing arrears"),
    Rule("skillLevel", lambda r, a: r.skillLevel <= 4, 1, "Skill level is C (≤ 4)"),
    Rule("cgpa", lambda r, a: r.cgpa <= 7, 3, "CGPA below 7.0"),
    Rule("discipline", lambda r, a: r.disciplineComplaints > 0, 2, "Has discipline complaints"),
    Rule("projects", lambda r, a: r.projectsCompleted < 1, 1, "No projects completed"),
    Rule("activityPoints", lambda r, a: r.activityPoints <= 5000, 1, "Activity points below 5000"),
    Rule(
        "rewardPoints",
        lambda r, a: r.rewardPoints < _class_average_reward_points(a),
        1,
        "Reward points below class average",
    ),
    Rule("certifications", lambda r, a: r.certificationsCount < 1, 1, "No certifications"),
    Rule("achievements", lambda r, a: r.achievementsCount < 1, 1, "No achievements"),
)

# Only these rules carry remediation advice; every other triggered rule adds none.
RULE_SUGGESTIONS: Dict[str, List[str]] = {
    "attendance": ["Improve attendance immediately", "Attend all classes regularly"],
    "periodicalTest": ["Focus on test preparation", "Attend remedial classes"],
    "standingArrears": ["Clear arrears in next semester", "Seek academic advisor help"],
    "cgpa": ["Improve core subject performance", "Create study schedule"],
    "discipline": ["Maintain discipline in campus", "Follow college rules"],
}


def evaluate_rules(record, aggregate=None) -> List[Rule]:
    """Returns every rule whose predicate holds, in table order. No short-circuiting."""
    return [rule for rule in RULES if rule.check(record, aggregate)]
