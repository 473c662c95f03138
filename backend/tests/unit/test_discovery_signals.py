from datetime import timedelta

from matchfeed.domain.discovery.signals import (
	InterestOverlapSignal,
	RecentActivitySignal,
	SameUniversitySignal,
	default_signals,
)


def test_same_university_requires_both_sides(make_profile, now):
	signal = SameUniversitySignal()
	me = make_profile("me", university="Strathmore University")

	assert signal.score(me, make_profile("a", university="Strathmore University"), now) == 10
	assert signal.score(me, make_profile("b", university="USIU"), now) == 0
	assert signal.score(me, make_profile("c", university=None), now) == 0
	assert signal.score(make_profile("x", university=""), make_profile("d", university=""), now) == 0


def test_interest_overlap_is_case_sensitive_set_intersection(make_profile, now):
	signal = InterestOverlapSignal()
	me = make_profile("me", interests=["Coding", "Gym", "Travel"])

	assert signal.score(me, make_profile("a", interests=["Coding", "Gym"]), now) == 4
	assert signal.score(me, make_profile("b", interests=["coding", "gym"]), now) == 0
	# duplicate tags only count once
	assert signal.score(me, make_profile("c", interests=["Travel", "Travel"]), now) == 2


def test_interest_overlap_treats_none_as_empty(make_profile, now):
	signal = InterestOverlapSignal()
	me = make_profile("me", interests=["Coding"])

	assert signal.score(me, make_profile("a", interests=None), now) == 0
	assert signal.score(make_profile("x", interests=None), make_profile("b", interests=["Coding"]), now) == 0


def test_recent_activity_window(make_profile, now, hours_ago):
	signal = RecentActivitySignal()
	me = make_profile("me")

	assert signal.score(me, make_profile("a", last_active_at=hours_ago(1)), now) == 5
	assert signal.score(me, make_profile("b", last_active_at=hours_ago(24)), now) == 0
	assert signal.score(me, make_profile("c", last_active_at=hours_ago(72)), now) == 0
	assert signal.score(me, make_profile("d", last_active_at=None), now) == 0


def test_recent_activity_accepts_naive_and_future_timestamps(make_profile, now):
	signal = RecentActivitySignal()
	me = make_profile("me")
	naive = (now - timedelta(hours=2)).replace(tzinfo=None)

	assert signal.score(me, make_profile("a", last_active_at=naive), now) == 5
	assert signal.score(me, make_profile("b", last_active_at=now + timedelta(minutes=5)), now) == 5


def test_default_signals_follow_overrides(make_profile, now, hours_ago):
	signals = default_signals(university_weight=1, interest_weight=3, recent_weight=7, recent_hours=2)
	me = make_profile("me", university="U", interests=["A"])
	them = make_profile("them", university="U", interests=["A"], last_active_at=hours_ago(3))

	assert [s.name for s in signals] == ["same_university", "interest_overlap", "recent_activity"]
	assert [s.score(me, them, now) for s in signals] == [1, 3, 0]
