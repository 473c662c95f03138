"""Discovery feed assembly: exclusions, candidate pool, ranking, paging."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from matchfeed.domain.discovery.exclusions import resolve_exclusions
from matchfeed.domain.discovery.exceptions import StoreUnavailable
from matchfeed.domain.discovery.models import DiscoveryPage, RankedCandidate
from matchfeed.domain.discovery.ranker import explore, rank_candidates
from matchfeed.domain.discovery.signals import Signal, default_signals
from matchfeed.domain.discovery.stores import ProfileStore, RelationshipStore, guarded
from matchfeed.obs import metrics as obs_metrics
from matchfeed.settings import settings

LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class DiscoveryService:
	"""Builds a user's discovery feed from the profile and relationship stores."""

	def __init__(
		self,
		profiles: ProfileStore,
		relationships: RelationshipStore,
		*,
		signals: Optional[Sequence[Signal]] = None,
		pool_size: Optional[int] = None,
		store_timeout: Optional[float] = None,
		explore_window: Optional[int] = None,
		clock: Callable[[], datetime] = _utcnow,
	) -> None:
		self._profiles = profiles
		self._relationships = relationships
		self._signals = tuple(signals) if signals is not None else tuple(default_signals())
		self._pool_size = pool_size or settings.discovery_pool_size
		self._timeout = settings.store_timeout_seconds if store_timeout is None else store_timeout
		self._explore_window = settings.discovery_explore_window if explore_window is None else explore_window
		self._clock = clock

	async def rank_for(
		self,
		requester_id: str,
		*,
		seed: Optional[int] = None,
		top_k: Optional[int] = None,
	) -> list[RankedCandidate]:
		"""Return the ranked pool for ``requester_id``, best first.

		With ``top_k`` only that many leading entries are kept. An empty list
		means the requester has no profile yet or nobody is eligible. Store
		failures raise ``StoreUnavailable`` instead.
		"""
		try:
			requester = await guarded(
				"get_profile",
				self._profiles.get_by_user_id(requester_id),
				timeout=self._timeout,
			)
			if requester is None:
				obs_metrics.feed_served("no_profile")
				LOGGER.info("discovery_feed_no_profile", extra={"requester_id": requester_id})
				return []

			exclusions = await resolve_exclusions(requester_id, self._relationships, timeout=self._timeout)
			pool = await guarded(
				"find_eligible",
				self._profiles.find_eligible(exclusions, limit=self._pool_size),
				timeout=self._timeout,
			)
		except StoreUnavailable as exc:
			obs_metrics.feed_served("unavailable")
			LOGGER.warning(
				"discovery_feed_unavailable",
				extra={"requester_id": requester_id, "operation": exc.operation},
			)
			raise

		ranked = rank_candidates(
			requester,
			pool[: self._pool_size],
			self._signals,
			now=self._clock(),
			exclusions=exclusions,
			top_k=top_k,
		)
		ranked = explore(ranked, seed=seed, window=self._explore_window)
		obs_metrics.feed_served("ok")
		LOGGER.info(
			"discovery_feed",
			extra={
				"requester_id": requester_id,
				"exclusions": len(exclusions),
				"pool": len(pool),
				"ranked": len(ranked),
			},
		)
		return ranked

	async def get_discovery_feed(
		self,
		requester_id: str,
		*,
		limit: int = 20,
		offset: int = 0,
		seed: Optional[int] = None,
	) -> DiscoveryPage:
		"""Return one page of the ranked feed.

		``limit`` is clamped to ``1..discovery_page_max`` and paging never reaches
		past the capped pool.
		"""
		limit = max(1, min(limit, settings.discovery_page_max))
		offset = max(0, offset)
		# one extra entry tells whether another page exists
		top_k = offset + limit + 1
		if seed is not None:
			top_k = max(top_k, self._explore_window)
		ranked = await self.rank_for(requester_id, seed=seed, top_k=top_k)
		items = ranked[offset : offset + limit]
		next_offset = offset + len(items)
		return DiscoveryPage(
			items=items,
			has_more=next_offset < len(ranked),
			next_offset=next_offset,
		)


__all__ = ["DiscoveryService"]
