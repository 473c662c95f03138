"""Store contracts consumed by the discovery core, plus in-memory stores.

The ranking core only reads. Writes to swipes, blocks and profiles happen in
other services; the in-memory stores expose ``add_*`` helpers so tests and
local tooling can seed them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Iterable, Optional, Protocol, Sequence, TypeVar

from matchfeed.domain.discovery.exceptions import StoreUnavailable
from matchfeed.domain.discovery.models import BlockRecord, SwipeRecord, UserProfile
from matchfeed.obs import metrics as obs_metrics

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class ProfileStore(Protocol):
	async def get_by_user_id(self, user_id: str) -> Optional[UserProfile]:
		...

	async def find_eligible(self, excluding: Iterable[str], limit: int) -> list[UserProfile]:
		"""Return visible, complete profiles whose id is not in ``excluding``."""
		...


class RelationshipStore(Protocol):
	async def get_swiped_ids(self, swiper_id: str) -> Sequence[str]:
		...

	async def get_blocked_by_me(self, user_id: str) -> Sequence[str]:
		...

	async def get_blockers_of_me(self, user_id: str) -> Sequence[str]:
		...


async def guarded(operation: str, call: Awaitable[T], *, timeout: Optional[float] = None) -> T:
	"""Await a store call, turning any failure into ``StoreUnavailable``.

	Cancellation is a ``BaseException`` and passes through untouched.
	"""
	try:
		if timeout is not None:
			return await asyncio.wait_for(call, timeout=timeout)
		return await call
	except StoreUnavailable:
		raise
	except Exception as exc:
		obs_metrics.store_failed(operation)
		LOGGER.warning(
			"store_lookup_failed",
			extra={"operation": operation, "error": type(exc).__name__},
		)
		raise StoreUnavailable(operation) from exc


class InMemoryProfileStore:
	"""Profiles kept in insertion order, which doubles as retrieval order."""

	def __init__(self, profiles: Iterable[UserProfile] = ()) -> None:
		self._profiles: dict[str, UserProfile] = {}
		for profile in profiles:
			self.upsert(profile)

	def upsert(self, profile: UserProfile) -> None:
		self._profiles[profile.user_id] = profile

	async def get_by_user_id(self, user_id: str) -> Optional[UserProfile]:
		return self._profiles.get(user_id)

	async def find_eligible(self, excluding: Iterable[str], limit: int) -> list[UserProfile]:
		excluded = set(excluding)
		found: list[UserProfile] = []
		for profile in self._profiles.values():
			if len(found) >= limit:
				break
			if profile.user_id in excluded or not profile.is_eligible:
				continue
			found.append(profile)
		return found


class InMemoryRelationshipStore:
	"""Swipe and block records held in lists; duplicates are kept as given."""

	def __init__(
		self,
		swipes: Iterable[SwipeRecord] = (),
		blocks: Iterable[BlockRecord] = (),
	) -> None:
		self._swipes: list[SwipeRecord] = list(swipes)
		self._blocks: list[BlockRecord] = list(blocks)

	def add_swipe(self, record: SwipeRecord) -> None:
		self._swipes.append(record)

	def add_block(self, record: BlockRecord) -> None:
		self._blocks.append(record)

	async def get_swiped_ids(self, swiper_id: str) -> list[str]:
		return [s.swiped_id for s in self._swipes if s.swiper_id == swiper_id]

	async def get_blocked_by_me(self, user_id: str) -> list[str]:
		return [b.blocked_id for b in self._blocks if b.blocker_id == user_id]

	async def get_blockers_of_me(self, user_id: str) -> list[str]:
		return [b.blocker_id for b in self._blocks if b.blocked_id == user_id]


__all__ = [
	"InMemoryProfileStore",
	"InMemoryRelationshipStore",
	"ProfileStore",
	"RelationshipStore",
	"guarded",
]
