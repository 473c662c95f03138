import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from matchfeed.domain.discovery.models import UserProfile
from matchfeed.infra import postgres
from matchfeed.main import app

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)


@pytest.fixture
def now() -> datetime:
	return NOW


@pytest.fixture
def make_profile():
	"""Factory for eligible profiles; override any field by keyword."""

	def _make(user_id: str, **overrides) -> UserProfile:
		fields = {
			"user_id": user_id,
			"university": None,
			"interests": (),
			"last_active_at": None,
			"is_visible": True,
			"is_profile_complete": True,
			"first_name": user_id.title(),
		}
		fields.update(overrides)
		if isinstance(fields["interests"], list):
			fields["interests"] = tuple(fields["interests"])
		return UserProfile(**fields)

	return _make


@pytest.fixture
def hours_ago(now):
	def _ago(hours: float) -> datetime:
		return now - timedelta(hours=hours)

	return _ago


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
	app.dependency_overrides.clear()
