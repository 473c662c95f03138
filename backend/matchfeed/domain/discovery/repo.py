"""Postgres-backed profile and relationship stores."""

from __future__ import annotations

from typing import Iterable, Optional

import asyncpg

from matchfeed.domain.discovery.models import UserProfile
from matchfeed.infra.postgres import get_pool

_PROFILE_COLUMNS = """
	user_id, university, interests, last_active, is_visible, profile_completed,
	first_name, last_name, age, gender, bio, course, year_of_study, looking_for,
	profile_photo, photos
"""


class PostgresProfileStore:
	def __init__(self, pool: Optional[asyncpg.pool.Pool] = None) -> None:
		self._pool = pool

	async def _acquire_pool(self) -> asyncpg.pool.Pool:
		return self._pool or await get_pool()

	async def get_by_user_id(self, user_id: str) -> Optional[UserProfile]:
		pool = await self._acquire_pool()
		async with pool.acquire() as conn:
			row = await conn.fetchrow(
				f"SELECT {_PROFILE_COLUMNS} FROM profiles WHERE user_id = $1 LIMIT 1",
				user_id,
			)
		return UserProfile.from_record(row) if row else None

	async def find_eligible(self, excluding: Iterable[str], limit: int) -> list[UserProfile]:
		# Most recently active first so the capped pool keeps the liveliest profiles
		pool = await self._acquire_pool()
		async with pool.acquire() as conn:
			rows = await conn.fetch(
				f"""
				SELECT {_PROFILE_COLUMNS}
				FROM profiles
				WHERE is_visible = TRUE
				  AND profile_completed = TRUE
				  AND NOT (user_id = ANY($1::text[]))
				ORDER BY last_active DESC NULLS LAST, user_id ASC
				LIMIT $2
				""",
				sorted(set(excluding)),
				limit,
			)
		return [UserProfile.from_record(row) for row in rows]


class PostgresRelationshipStore:
	def __init__(self, pool: Optional[asyncpg.pool.Pool] = None) -> None:
		self._pool = pool

	async def _fetch_ids(self, query: str, user_id: str) -> list[str]:
		pool = self._pool or await get_pool()
		async with pool.acquire() as conn:
			rows = await conn.fetch(query, user_id)
		return [str(row["id"]) for row in rows]

	async def get_swiped_ids(self, swiper_id: str) -> list[str]:
		# The swipes table has no unique (swiper, swiped) constraint
		return await self._fetch_ids(
			"SELECT DISTINCT swiped_id AS id FROM swipes WHERE swiper_id = $1",
			swiper_id,
		)

	async def get_blocked_by_me(self, user_id: str) -> list[str]:
		return await self._fetch_ids(
			"SELECT blocked_id AS id FROM blocks WHERE blocker_id = $1",
			user_id,
		)

	async def get_blockers_of_me(self, user_id: str) -> list[str]:
		return await self._fetch_ids(
			"SELECT blocker_id AS id FROM blocks WHERE blocked_id = $1",
			user_id,
		)
