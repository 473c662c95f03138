"""Print a user's discovery feed with the per-signal score breakdown.

Usage: python backend/scripts/explain_feed.py <user_id> [--limit 20] [--seed 7]
"""

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from matchfeed.domain.discovery.exceptions import StoreUnavailable
from matchfeed.domain.discovery.repo import PostgresProfileStore, PostgresRelationshipStore
from matchfeed.domain.discovery.service import DiscoveryService
from matchfeed.infra import postgres


def _explain(breakdown: dict[str, int]) -> str:
	parts = " + ".join(f"{value} ({name})" for name, value in breakdown.items())
	return f"{parts} = {sum(breakdown.values())}"


async def main(user_id: str, limit: int, seed: int | None) -> int:
	await postgres.init_pool()
	try:
		service = DiscoveryService(PostgresProfileStore(), PostgresRelationshipStore())
		page = await service.get_discovery_feed(user_id, limit=limit, seed=seed)
	except StoreUnavailable as exc:
		print(f"Feed unavailable: {exc.operation} failed ({exc.__cause__!r})")
		return 1
	finally:
		await postgres.close_pool()

	if not page.items:
		print(f"No candidates for {user_id} (no profile, or nobody eligible)")
		return 0
	for rank, item in enumerate(page.items, start=1):
		profile = item.profile
		name = f"{profile.first_name} {profile.last_name}".strip() or "-"
		print(f"{rank:>3}. {profile.user_id} {name} [{profile.university or 'no university'}]")
		print(f"     {_explain(item.breakdown)}")
	print(f"has_more={page.has_more} next_offset={page.next_offset}")
	return 0


if __name__ == "__main__":
	parser = argparse.ArgumentParser(description=__doc__)
	parser.add_argument("user_id")
	parser.add_argument("--limit", type=int, default=20)
	parser.add_argument("--seed", type=int, default=None)
	args = parser.parse_args()
	sys.exit(asyncio.run(main(args.user_id, args.limit, args.seed)))
