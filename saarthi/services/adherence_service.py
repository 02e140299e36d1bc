"""
Adherence entry recording and aggregation.

Scores a new submission against the patient's existing entries, appends the
result, and summarizes the rolling window shown on the patient and doctor
dashboards.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm.attributes import flag_modified

from saarthi.extensions import db
from saarthi.models import AdherenceEntry, Patient
from saarthi.scoring import (
    AdherenceSubmission,
    ScoreResult,
    calendar_day,
    compute_score,
    count_streak,
    override_score,
    round_half_up,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


@dataclass
class AdherencePayload:
    """Validated request body for a new adherence entry."""
    adherent: bool
    date: datetime
    notes: str = ""
    was_useful: Optional[bool] = None
    duration_label: Optional[str] = None
    appliance_type: Optional[str] = None
    photo_url: Optional[str] = None
    reason: Optional[str] = None
    score_override: Optional[float] = None

    def to_submission(self) -> AdherenceSubmission:
        return AdherenceSubmission(
            adherent=self.adherent,
            duration_label=self.duration_label,
            was_useful=self.was_useful,
            has_photo=bool(self.photo_url),
            appliance_type=self.appliance_type,
            submitted_at=self.date,
        )


@dataclass
class AdherenceSummary:
    total: int
    yes: int
    answered_today: bool
    adherence_percent: int
    current_streak: int
    latest_score: Optional[int]

    def to_dict(self):
        return {
            "last30days": self.total,
            "yes": self.yes,
            "answeredToday": self.answered_today,
            "adherencePercent": self.adherence_percent,
            "currentStreak": self.current_streak,
            "latestScore": self.latest_score,
        }


def score_payload(payload: AdherencePayload, prior_history: Iterable) -> ScoreResult:
    if payload.score_override is not None:
        return override_score(payload.score_override)
    return compute_score(payload.to_submission(), prior_history)


def record_adherence_entry(patient: Patient, payload: AdherencePayload) -> AdherenceEntry:
    """
    Score ``payload`` against ``patient``'s current history and append the entry.

    The patient row is version-checked on commit; a concurrent append for the
    same patient raises ``sqlalchemy.orm.exc.StaleDataError``. The caller owns
    rollback.
    """
    prior_history = list(patient.adherence_entries)
    result = score_payload(payload, prior_history)

    entry = AdherenceEntry(
        date=payload.date,
        adherent=payload.adherent,
        notes=payload.notes or "",
        was_useful=payload.was_useful,
        duration_label=payload.duration_label,
        appliance_type=payload.appliance_type,
        photo_url=payload.photo_url,
        reason=payload.reason,
        score=result.score,
        breakdown=None if result.is_override else result.breakdown.to_dict(),
        score_source=result.source.value,
    )
    patient.adherence_entries.append(entry)
    # stamp never moves backwards, and is always flagged so the versioned UPDATE runs
    if patient.last_adherence_at is None or payload.date > patient.last_adherence_at:
        patient.last_adherence_at = payload.date
    flag_modified(patient, "last_adherence_at")
    db.session.commit()

    logger.info(
        "Adherence entry recorded patient_id=%s score=%s source=%s",
        patient.id, result.score, result.source.value,
    )
    return entry


def summarize_adherence(entries: Iterable, now: Optional[datetime] = None,
                        window_days: int = DEFAULT_WINDOW_DAYS) -> AdherenceSummary:
    now = now or datetime.now()
    entries = list(entries)
    window_start = now - timedelta(days=window_days)
    today = calendar_day(now)

    in_window = [e for e in entries if window_start <= e.date <= now]
    yes = sum(1 for e in in_window if e.adherent is True)
    percent = round_half_up(yes / len(in_window) * 100) if in_window else 100

    answered_today = any(calendar_day(e.date) == today for e in entries)
    # today's report has not necessarily been made yet; fall back to yesterday
    streak = count_streak(entries, today)
    if streak == 0:
        streak = count_streak(entries, today - timedelta(days=1))

    latest_score = None
    for entry in sorted(entries, key=lambda e: e.date, reverse=True):
        if entry.score is not None:
            latest_score = entry.score
            break

    return AdherenceSummary(
        total=len(in_window),
        yes=yes,
        answered_today=answered_today,
        adherence_percent=percent,
        current_streak=streak,
        latest_score=latest_score,
    )
