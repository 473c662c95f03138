"""Schemas for the discovery feed endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from matchfeed.domain.discovery.models import DiscoveryPage, RankedCandidate


class DiscoveryCard(BaseModel):
	user_id: str
	first_name: str = ""
	last_name: str = ""
	age: Optional[int] = None
	gender: Optional[str] = None
	bio: Optional[str] = None
	university: Optional[str] = None
	course: Optional[str] = None
	year_of_study: Optional[int] = None
	looking_for: Optional[str] = None
	interests: list[str] = Field(default_factory=list)
	profile_photo: Optional[str] = None
	photos: list[str] = Field(default_factory=list)
	last_active_at: Optional[datetime] = None
	score: int = 0
	score_breakdown: dict[str, int] = Field(default_factory=dict)

	@classmethod
	def from_ranked(cls, item: RankedCandidate) -> "DiscoveryCard":
		profile = item.profile
		return cls(
			user_id=profile.user_id,
			first_name=profile.first_name,
			last_name=profile.last_name,
			age=profile.age,
			gender=profile.gender,
			bio=profile.bio,
			university=profile.university,
			course=profile.course,
			year_of_study=profile.year_of_study,
			looking_for=profile.looking_for,
			interests=list(profile.interests or ()),
			profile_photo=profile.profile_photo,
			photos=list(profile.photos),
			last_active_at=profile.last_active_at,
			score=item.score,
			score_breakdown=dict(item.breakdown),
		)


class DiscoveryFeedResponse(BaseModel):
	profiles: list[DiscoveryCard] = Field(default_factory=list)
	has_more: bool = False
	next_offset: int = 0

	@classmethod
	def from_page(cls, page: DiscoveryPage) -> "DiscoveryFeedResponse":
		return cls(
			profiles=[DiscoveryCard.from_ranked(item) for item in page.items],
			has_more=page.has_more,
			next_offset=page.next_offset,
		)
