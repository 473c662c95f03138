"""Discovery swipe feed endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from matchfeed.domain.discovery.repo import PostgresProfileStore, PostgresRelationshipStore
from matchfeed.domain.discovery.schemas import DiscoveryFeedResponse
from matchfeed.domain.discovery.service import DiscoveryService
from matchfeed.infra.auth import AuthenticatedUser, get_current_user

router = APIRouter(prefix="/discovery", tags=["discovery"])


def get_discovery_service() -> DiscoveryService:
	return DiscoveryService(PostgresProfileStore(), PostgresRelationshipStore())


@router.get("/feed", response_model=DiscoveryFeedResponse)
async def discovery_feed(
	*,
	limit: int = Query(default=20),
	offset: int = Query(default=0),
	seed: Optional[int] = Query(default=None),
	auth_user: AuthenticatedUser = Depends(get_current_user),
	service: DiscoveryService = Depends(get_discovery_service),
) -> DiscoveryFeedResponse:
	# the service clamps limit and offset
	page = await service.get_discovery_feed(auth_user.id, limit=limit, offset=offset, seed=seed)
	return DiscoveryFeedResponse.from_page(page)
