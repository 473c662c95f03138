"""Exclusion set resolution for the discovery feed."""

from __future__ import annotations

import asyncio
from typing import Optional

from matchfeed.domain.discovery.stores import RelationshipStore, guarded
from matchfeed.obs import metrics as obs_metrics


async def resolve_exclusions(
	user_id: str,
	relationships: RelationshipStore,
	*,
	timeout: Optional[float] = None,
) -> frozenset[str]:
	"""Return every user id that must not appear in ``user_id``'s feed.

	That is the user themselves, everyone they already swiped on (likes and
	passes alike), everyone they blocked and everyone who blocked them. The
	three lookups are independent and run concurrently; if any of them fails
	the whole resolution raises ``StoreUnavailable`` and the lookups still
	in flight are cancelled. There is no partial set.
	"""
	tasks = [
		asyncio.create_task(guarded("swiped_ids", relationships.get_swiped_ids(user_id), timeout=timeout)),
		asyncio.create_task(guarded("blocked_by_me", relationships.get_blocked_by_me(user_id), timeout=timeout)),
		asyncio.create_task(guarded("blockers_of_me", relationships.get_blockers_of_me(user_id), timeout=timeout)),
	]
	try:
		swiped, blocked_by_me, blockers_of_me = await asyncio.gather(*tasks)
	except BaseException:
		# no lookup outlives a failed resolution
		for task in tasks:
			task.cancel()
		await asyncio.gather(*tasks, return_exceptions=True)
		raise
	excluded = {user_id}
	excluded.update(str(uid) for uid in swiped)
	excluded.update(str(uid) for uid in blocked_by_me)
	excluded.update(str(uid) for uid in blockers_of_me)
	obs_metrics.observe_exclusions(len(excluded))
	return frozenset(excluded)


__all__ = ["resolve_exclusions"]
