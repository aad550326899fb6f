"""
Derived metrics over a single user's applications.

Everything here is pure: no session, no logging, no exceptions. Inputs may be
ORM rows or plain mappings; a field that is missing or cannot be read as a
date/datetime simply disqualifies the application from that phase.

Durations are fractional days. A phase with no qualifying application
averages 0.0; ``samples`` carries the qualifying count so callers can tell
"no data" from "zero days". Negative durations are kept as-is.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Iterable, Mapping

from app.models.application import INTERVIEWING_STATUSES, ApplicationStatus

SECONDS_PER_DAY = 86400.0

# (phase name, start field, end field)
PHASES: tuple[tuple[str, str, str], ...] = (
    ("applied_to_interview", "date_applied", "interview_date"),
    ("interview_to_offer", "interview_date", "offer_date"),
    ("offer_to_rejected", "offer_date", "rejected_date"),
)


@dataclass(frozen=True)
class StageCounts:
    total: int = 0
    applied: int = 0
    interviewing: int = 0
    offered: int = 0
    rejected: int = 0


@dataclass(frozen=True)
class PhaseAverages:
    applied_to_interview: float = 0.0
    interview_to_offer: float = 0.0
    offer_to_rejected: float = 0.0


@dataclass(frozen=True)
class PhaseSamples:
    applied_to_interview: int = 0
    interview_to_offer: int = 0
    offer_to_rejected: int = 0


@dataclass(frozen=True)
class ApplicationMetrics:
    counts: StageCounts
    averages: PhaseAverages
    samples: PhaseSamples


def _field(application: Any, name: str) -> Any:
    if isinstance(application, Mapping):
        return application.get(name)
    return getattr(application, name, None)


def _status(application: Any) -> str | None:
    value = _field(application, "status")
    if isinstance(value, Enum):
        value = value.value
    return value if isinstance(value, str) else None


def as_datetime(value: Any) -> datetime | None:
    """Dates become UTC midnight, naive datetimes are read as UTC, ISO strings are parsed."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def phase_duration_days(application: Any, start_field: str, end_field: str) -> float | None:
    start = as_datetime(_field(application, start_field))
    end = as_datetime(_field(application, end_field))
    if start is None or end is None:
        return None
    return (end - start).total_seconds() / SECONDS_PER_DAY


def count_stages(applications: Iterable[Any]) -> StageCounts:
    total = applied = interviewing = offered = rejected = 0
    for app in applications:
        total += 1
        status = _status(app)
        if status == ApplicationStatus.APPLIED.value:
            applied += 1
        elif status in INTERVIEWING_STATUSES:
            interviewing += 1
        elif status == ApplicationStatus.OFFER.value:
            offered += 1
        elif status == ApplicationStatus.REJECTED.value:
            rejected += 1
    return StageCounts(
        total=total,
        applied=applied,
        interviewing=interviewing,
        offered=offered,
        rejected=rejected,
    )


def average_phase_durations(applications: Iterable[Any]) -> tuple[PhaseAverages, PhaseSamples]:
    durations: dict[str, list[float]] = {name: [] for name, _, _ in PHASES}
    for app in applications:
        for name, start_field, end_field in PHASES:
            days = phase_duration_days(app, start_field, end_field)
            if days is not None:
                durations[name].append(days)

    averages = {
        name: (sum(values) / len(values) if values else 0.0)
        for name, values in durations.items()
    }
    samples = {name: len(values) for name, values in durations.items()}
    return PhaseAverages(**averages), PhaseSamples(**samples)


def compute_metrics(applications: Iterable[Any] | None) -> ApplicationMetrics:
    apps = list(applications or [])
    averages, samples = average_phase_durations(apps)
    return ApplicationMetrics(counts=count_stages(apps), averages=averages, samples=samples)
