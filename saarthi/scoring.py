"""
Adherence scoring engine.

Turns one daily wear submission plus the patient's earlier history into a
0-100 score and an itemized breakdown. Pure: no I/O, no clock reads beyond
``submitted_at`` defaulting to now at construction.
"""

import enum
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

BASE_POINTS = 50
USEFUL_POINTS = 10
PHOTO_POINTS = 10
STREAK_POINTS_PER_DAY = 3
STREAK_CAP_DAYS = 7
MAX_DURATION_MINUTES = 120
MAX_DURATION_POINTS = 30
SCORE_MIN, SCORE_MAX = 0, 100

DURATION_POINTS = {
    "<6 hrs": 0,
    "6-10 hrs": 8,
    "10-14 hrs": 15,
    "14-18 hrs": 22,
    ">18 hrs": 30,
}

# checked in order, first match wins
APPLIANCE_POINTS = (
    ("aligner", 6),
    ("brace", 4),
)


class ScoreSource(str, enum.Enum):
    COMPUTED = "computed"
    OVERRIDDEN = "override"


@dataclass(frozen=True)
class AdherenceSubmission:
    adherent: bool
    duration_label: Optional[str] = None
    was_useful: Optional[bool] = None
    has_photo: bool = False
    appliance_type: Optional[str] = None
    submitted_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ScoreBreakdown:
    base: int = 0
    duration_points: int = 0
    useful_points: int = 0
    photo_points: int = 0
    appliance_points: int = 0
    streak_points: int = 0
    total_before_clamp: int = 0
    final: int = 0

    def to_dict(self) -> dict:
        return {
            "base": self.base,
            "durationPoints": self.duration_points,
            "usefulPoints": self.useful_points,
            "photoPoints": self.photo_points,
            "appliancePoints": self.appliance_points,
            "streakPoints": self.streak_points,
            "totalBeforeClamp": self.total_before_clamp,
            "final": self.final,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreBreakdown":
        return cls(
            base=data.get("base", 0),
            duration_points=data.get("durationPoints", 0),
            useful_points=data.get("usefulPoints", 0),
            photo_points=data.get("photoPoints", 0),
            appliance_points=data.get("appliancePoints", 0),
            streak_points=data.get("streakPoints", 0),
            total_before_clamp=data.get("totalBeforeClamp", 0),
            final=data.get("final", 0),
        )


@dataclass(frozen=True)
class ScoreResult:
    """A stored score: engine-computed with a breakdown, or an override without one."""
    score: int
    breakdown: Optional[ScoreBreakdown]
    source: ScoreSource

    @property
    def is_override(self) -> bool:
        return self.source is ScoreSource.OVERRIDDEN


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value, low, high):
    return max(low, min(high, value))


def calendar_day(value) -> date:
    """Local calendar date of a date/datetime. Aware datetimes are moved to the local zone."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def duration_points(label: Optional[str]) -> int:
    if label is None:
        return 0
    label = str(label).strip()
    if label in DURATION_POINTS:
        return DURATION_POINTS[label]
    # unrecognized label: try it as minutes worn
    try:
        minutes = float(label)
    except ValueError:
        return 0
    if not math.isfinite(minutes):
        return 0
    minutes = clamp(minutes, 0, MAX_DURATION_MINUTES)
    return round_half_up(minutes / MAX_DURATION_MINUTES * MAX_DURATION_POINTS)


def appliance_points(appliance_type: Optional[str]) -> int:
    if not appliance_type:
        return 0
    lowered = str(appliance_type).lower()
    for needle, points in APPLIANCE_POINTS:
        if needle in lowered:
            return points
    return 0


def count_streak(history: Iterable, day: date, cap: Optional[int] = None) -> int:
    """
    Count consecutive adherent calendar days ending at ``day`` and walking backward.

    A day counts when at least one history record falls on it with
    ``adherent`` true. Record order is irrelevant.
    """
    adherent_days = {calendar_day(entry.date) for entry in history if entry.adherent is True}
    streak = 0
    while day in adherent_days:
        streak += 1
        if cap is not None and streak >= cap:
            break
        day -= timedelta(days=1)
    return streak


def compute_score(submission: AdherenceSubmission, prior_history: Iterable = ()) -> ScoreResult:
    """
    Score one submission against the patient's history as it was before this entry.

    Never raises on optional fields; anything unrecognized contributes zero.
    """
    if not submission.adherent:
        return ScoreResult(score=0, breakdown=ScoreBreakdown(), source=ScoreSource.COMPUTED)

    yesterday = calendar_day(submission.submitted_at) - timedelta(days=1)
    streak = count_streak(prior_history, yesterday, cap=STREAK_CAP_DAYS)

    parts = dict(
        base=BASE_POINTS,
        duration_points=duration_points(submission.duration_label),
        useful_points=USEFUL_POINTS if submission.was_useful is True else 0,
        photo_points=PHOTO_POINTS if submission.has_photo else 0,
        appliance_points=appliance_points(submission.appliance_type),
        streak_points=min(streak, STREAK_CAP_DAYS) * STREAK_POINTS_PER_DAY,
    )
    total = sum(parts.values())
    final = round_half_up(clamp(total, SCORE_MIN, SCORE_MAX))

    breakdown = ScoreBreakdown(total_before_clamp=total, final=final, **parts)
    return ScoreResult(score=final, breakdown=breakdown, source=ScoreSource.COMPUTED)


def override_score(value) -> ScoreResult:
    """Caller-supplied score; the engine is bypassed and no breakdown exists."""
    score = round_half_up(clamp(float(value), SCORE_MIN, SCORE_MAX))
    return ScoreResult(score=score, breakdown=None, source=ScoreSource.OVERRIDDEN)
