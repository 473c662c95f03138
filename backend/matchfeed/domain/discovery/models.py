"""Domain models for the discovery feed."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

RECENT_ACTIVITY_HOURS = 24


def _string_list(raw: Any) -> tuple[str, ...]:
	"""Coerce a json/array column into a tuple of strings.

	Rows written by older clients store interests as a JSON string, newer ones
	as a native array; null and garbage both collapse to an empty tuple.
	"""
	if raw is None:
		return ()
	if isinstance(raw, str):
		try:
			raw = json.loads(raw)
		except ValueError:
			return ()
	if not isinstance(raw, (list, tuple, set, frozenset)):
		return ()
	return tuple(str(item) for item in raw if isinstance(item, str) and item)


@dataclass(slots=True, frozen=True)
class UserProfile:
	"""Profile snapshot used for ranking and for rendering a discovery card."""

	user_id: str
	university: Optional[str] = None
	interests: Optional[tuple[str, ...]] = ()
	last_active_at: Optional[datetime] = None
	is_visible: bool = True
	is_profile_complete: bool = False
	first_name: str = ""
	last_name: str = ""
	age: Optional[int] = None
	gender: Optional[str] = None
	bio: Optional[str] = None
	course: Optional[str] = None
	year_of_study: Optional[int] = None
	looking_for: Optional[str] = None
	profile_photo: Optional[str] = None
	photos: tuple[str, ...] = ()

	@property
	def is_eligible(self) -> bool:
		return bool(self.is_visible) and bool(self.is_profile_complete)

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "UserProfile":
		data = dict(record)
		return cls(
			user_id=str(data["user_id"]),
			university=data.get("university") or None,
			interests=_string_list(data.get("interests")),
			last_active_at=data.get("last_active"),
			is_visible=bool(data.get("is_visible")),
			is_profile_complete=bool(data.get("profile_completed")),
			first_name=data.get("first_name") or "",
			last_name=data.get("last_name") or "",
			age=data.get("age"),
			gender=data.get("gender"),
			bio=data.get("bio"),
			course=data.get("course"),
			year_of_study=data.get("year_of_study"),
			looking_for=data.get("looking_for"),
			profile_photo=data.get("profile_photo"),
			photos=_string_list(data.get("photos")),
		)


@dataclass(slots=True, frozen=True)
class SwipeRecord:
	"""One directional judgment; likes and passes both hide the target."""

	swiper_id: str
	swiped_id: str
	is_like: bool
	created_at: datetime


@dataclass(slots=True, frozen=True)
class BlockRecord:
	"""A unilateral block. Exclusion reads it in both directions."""

	blocker_id: str
	blocked_id: str
	created_at: datetime


@dataclass(slots=True)
class RankedCandidate:
	"""A scored candidate, recomputed on every feed request."""

	profile: UserProfile
	score: int
	breakdown: dict[str, int] = field(default_factory=dict)

	@property
	def user_id(self) -> str:
		return self.profile.user_id


@dataclass(slots=True)
class DiscoveryPage:
	items: list[RankedCandidate] = field(default_factory=list)
	has_more: bool = False
	next_offset: int = 0
