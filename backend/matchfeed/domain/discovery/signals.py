"""Independent, additive scoring signals for discovery candidates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, Sequence

from matchfeed.domain.discovery.models import RECENT_ACTIVITY_HOURS, UserProfile
from matchfeed.settings import settings


class Signal(Protocol):
	name: str

	def score(self, requester: UserProfile, candidate: UserProfile, now: datetime) -> int:
		...


def _as_utc(value: datetime) -> datetime:
	if value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


@dataclass(frozen=True, slots=True)
class SameUniversitySignal:
	weight: int = 10
	name: str = "same_university"

	def score(self, requester: UserProfile, candidate: UserProfile, now: datetime) -> int:
		if not requester.university or not candidate.university:
			return 0
		return self.weight if candidate.university == requester.university else 0


@dataclass(frozen=True, slots=True)
class InterestOverlapSignal:
	"""Exact, case-sensitive tag overlap. Duplicate tags count once."""

	weight: int = 2
	name: str = "interest_overlap"

	def score(self, requester: UserProfile, candidate: UserProfile, now: datetime) -> int:
		mine = set(requester.interests or ())
		theirs = set(candidate.interests or ())
		return self.weight * len(mine & theirs)


@dataclass(frozen=True, slots=True)
class RecentActivitySignal:
	weight: int = 5
	window: timedelta = timedelta(hours=RECENT_ACTIVITY_HOURS)
	name: str = "recent_activity"

	def score(self, requester: UserProfile, candidate: UserProfile, now: datetime) -> int:
		if candidate.last_active_at is None:
			return 0
		# future timestamps (clock skew) count as active
		elapsed = _as_utc(now) - _as_utc(candidate.last_active_at)
		return self.weight if elapsed < self.window else 0


def default_signals(
	*,
	university_weight: Optional[int] = None,
	interest_weight: Optional[int] = None,
	recent_weight: Optional[int] = None,
	recent_hours: Optional[float] = None,
) -> Sequence[Signal]:
	"""Build the standard signal pipeline from settings, with optional overrides."""
	return (
		SameUniversitySignal(
			weight=settings.discovery_weight_university if university_weight is None else university_weight,
		),
		InterestOverlapSignal(
			weight=settings.discovery_weight_interest if interest_weight is None else interest_weight,
		),
		RecentActivitySignal(
			weight=settings.discovery_weight_recent if recent_weight is None else recent_weight,
			window=timedelta(
				hours=settings.discovery_recent_activity_hours if recent_hours is None else recent_hours,
			),
		),
	)


__all__ = [
	"InterestOverlapSignal",
	"RecentActivitySignal",
	"SameUniversitySignal",
	"Signal",
	"default_signals",
]
