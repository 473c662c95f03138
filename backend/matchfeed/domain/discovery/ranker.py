"""Discovery candidate scoring and ordering.

Scoring is a pure function of (requester, candidate pool, signals, now). The
ordering key is score desc, then ``last_active_at`` desc with missing values
last, then ``user_id`` asc, so equal scores never depend on storage order.
Exploration lives in ``explore`` and runs strictly after ranking.
"""

from __future__ import annotations

import heapq
import logging
import random
from datetime import datetime, timezone
from time import perf_counter
from typing import Collection, Iterable, Optional, Sequence

from matchfeed.domain.discovery.models import RankedCandidate, UserProfile
from matchfeed.domain.discovery.signals import Signal
from matchfeed.obs import metrics as obs_metrics

LOGGER = logging.getLogger(__name__)


def _activity_ts(profile: UserProfile) -> float:
	value = profile.last_active_at
	if value is None:
		return float("-inf")
	if value.tzinfo is None:
		value = value.replace(tzinfo=timezone.utc)
	return value.timestamp()


def sort_key(item: RankedCandidate) -> tuple[float, float, str]:
	"""Ascending key: best candidate first."""
	return (-item.score, -_activity_ts(item.profile), item.profile.user_id)


def score_candidate(
	requester: UserProfile,
	candidate: UserProfile,
	signals: Sequence[Signal],
	now: datetime,
) -> RankedCandidate:
	breakdown: dict[str, int] = {}
	for signal in signals:
		try:
			contribution = int(signal.score(requester, candidate, now))
		except (TypeError, ValueError, AttributeError, OverflowError):
			# malformed candidate field: this signal contributes nothing
			LOGGER.warning(
				"discovery_signal_failed",
				extra={"signal": signal.name, "candidate_id": candidate.user_id},
				exc_info=True,
			)
			obs_metrics.signal_failed(signal.name)
			contribution = 0
		breakdown[signal.name] = max(0, contribution)
	return RankedCandidate(profile=candidate, score=sum(breakdown.values()), breakdown=breakdown)


def rank_candidates(
	requester: UserProfile,
	candidates: Iterable[UserProfile],
	signals: Sequence[Signal],
	*,
	now: Optional[datetime] = None,
	exclusions: Collection[str] = (),
	top_k: Optional[int] = None,
) -> list[RankedCandidate]:
	"""Score eligible candidates and return them best first.

	Candidates that are excluded, ineligible or the requester themselves are
	dropped again here even though the store already filters them. With
	``top_k`` only the best ``top_k`` are kept, via a bounded heap.
	"""
	start = perf_counter()
	now = now or datetime.now(timezone.utc)
	scored: list[RankedCandidate] = []
	seen: set[str] = set()
	for candidate in candidates:
		uid = candidate.user_id
		if uid == requester.user_id or uid in exclusions or uid in seen:
			continue
		if not candidate.is_eligible:
			continue
		seen.add(uid)
		scored.append(score_candidate(requester, candidate, signals, now))

	scored_count = len(scored)
	if top_k is not None and top_k < scored_count:
		scored = select_top(scored, top_k)
	else:
		scored.sort(key=sort_key)

	obs_metrics.observe_rank(scored_count, (perf_counter() - start) * 1000.0)
	return scored


def select_top(ranked: Iterable[RankedCandidate], k: int) -> list[RankedCandidate]:
	"""Bounded-heap top-k over ``sort_key``; same order as a full sort."""
	if k <= 0:
		return []
	return heapq.nsmallest(k, ranked, key=sort_key)


def explore(
	ranked: Sequence[RankedCandidate],
	*,
	seed: Optional[int],
	window: int,
) -> list[RankedCandidate]:
	"""Shuffle the head of a ranked feed with a seeded RNG.

	Only the first ``window`` entries move; scores are untouched. With
	``seed=None`` the ranking is returned as is.
	"""
	items = list(ranked)
	if seed is None or window <= 1 or len(items) <= 1:
		return items
	head = items[:window]
	random.Random(seed).shuffle(head)
	return head + items[window:]


__all__ = ["explore", "rank_candidates", "score_candidate", "select_top", "sort_key"]
