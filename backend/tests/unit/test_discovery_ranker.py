from dataclasses import dataclass

import pytest

from matchfeed.domain.discovery import ranker
from matchfeed.domain.discovery.ranker import explore, rank_candidates, score_candidate, select_top
from matchfeed.domain.discovery.signals import default_signals

SIGNALS = default_signals(university_weight=10, interest_weight=2, recent_weight=5, recent_hours=24)


def test_score_is_sum_of_all_three_signals(make_profile, now, hours_ago):
	me = make_profile("me", university="Strathmore University", interests=["Coding", "Gym", "Travel", "Art"])
	full = make_profile(
		"full",
		university="Strathmore University",
		interests=["Coding", "Gym", "Travel"],
		last_active_at=hours_ago(2),
	)
	none = make_profile("none", university="KU", interests=["Chess"], last_active_at=hours_ago(48))

	scored = score_candidate(me, full, SIGNALS, now)
	assert scored.score == 21
	assert scored.breakdown == {"same_university": 10, "interest_overlap": 6, "recent_activity": 5}
	assert score_candidate(me, none, SIGNALS, now).score == 0


def test_strathmore_scenario_orders_a_before_b(make_profile, now, hours_ago):
	me = make_profile("me", university="Strathmore University", interests=["Coding", "Gym", "Travel"])
	a = make_profile("a", university="Strathmore University", interests=["Coding", "Gym"], last_active_at=hours_ago(1))
	b = make_profile("b", university="Daystar", interests=["Coding"], last_active_at=hours_ago(72))

	ranked = rank_candidates(me, [b, a], SIGNALS, now=now)

	assert [(r.user_id, r.score) for r in ranked] == [("a", 19), ("b", 2)]


def test_rank_drops_self_excluded_and_ineligible(make_profile, now):
	me = make_profile("me")
	pool = [
		make_profile("me"),
		make_profile("hidden", is_visible=False),
		make_profile("draft", is_profile_complete=False),
		make_profile("swiped"),
		make_profile("ok"),
		make_profile("ok"),
	]

	ranked = rank_candidates(me, pool, SIGNALS, now=now, exclusions={"me", "swiped"})

	assert [r.user_id for r in ranked] == ["ok"]


def test_ties_break_on_activity_then_user_id(make_profile, now, hours_ago):
	me = make_profile("me")
	pool = [
		make_profile("zed", last_active_at=hours_ago(30)),
		make_profile("bob"),
		make_profile("amy"),
		make_profile("kim", last_active_at=hours_ago(40)),
	]

	ranked = rank_candidates(me, pool, SIGNALS, now=now)

	assert all(r.score == 0 for r in ranked)
	assert [r.user_id for r in ranked] == ["zed", "kim", "amy", "bob"]


def test_ranking_is_monotonic_and_idempotent(make_profile, now, hours_ago):
	me = make_profile("me", university="U", interests=["a", "b", "c"])
	pool = [
		make_profile(
			f"user-{i:02d}",
			university="U" if i % 3 == 0 else "V",
			interests=["a", "b", "c"][: i % 4],
			last_active_at=hours_ago(i * 5),
		)
		for i in range(25)
	]

	first = rank_candidates(me, pool, SIGNALS, now=now)
	second = rank_candidates(me, list(reversed(pool)), SIGNALS, now=now)

	scores = [r.score for r in first]
	assert scores == sorted(scores, reverse=True)
	assert [r.user_id for r in first] == [r.user_id for r in second]


def test_failing_signal_contributes_zero_without_aborting(make_profile, now, hours_ago, monkeypatch):
	@dataclass(frozen=True)
	class Exploding:
		name: str = "exploding"

		def score(self, requester, candidate, now):
			raise TypeError("bad field")

	failures: list[str] = []
	monkeypatch.setattr(ranker.obs_metrics, "signal_failed", failures.append)
	me = make_profile("me")
	pool = [make_profile("a", last_active_at=hours_ago(1)), make_profile("b")]

	ranked = rank_candidates(me, pool, (*SIGNALS, Exploding()), now=now)

	assert [(r.user_id, r.score) for r in ranked] == [("a", 5), ("b", 0)]
	assert ranked[0].breakdown["exploding"] == 0
	assert failures == ["exploding", "exploding"]


def test_unhashable_interests_do_not_abort_batch(make_profile, now):
	me = make_profile("me", interests=["Coding"])
	broken = make_profile("broken", interests=(["Coding"],))
	fine = make_profile("fine", interests=["Coding"])

	ranked = rank_candidates(me, [broken, fine], SIGNALS, now=now)

	assert [(r.user_id, r.score) for r in ranked] == [("fine", 2), ("broken", 0)]


def test_select_top_matches_full_sort(make_profile, now, hours_ago):
	me = make_profile("me", interests=["a", "b"])
	pool = [
		make_profile(f"u{i}", interests=["a", "b"][: i % 3], last_active_at=hours_ago(i))
		for i in range(30)
	]
	ranked = rank_candidates(me, pool, SIGNALS, now=now)

	assert [r.user_id for r in select_top(ranked, 7)] == [r.user_id for r in ranked[:7]]
	assert select_top(ranked, 0) == []


def test_top_k_keeps_only_the_best_entries(make_profile, now, hours_ago):
	me = make_profile("me", interests=["a", "b"])
	pool = [
		make_profile(f"u{i}", interests=["a", "b"][: i % 3], last_active_at=hours_ago(i))
		for i in range(30)
	]

	full = rank_candidates(me, pool, SIGNALS, now=now)
	top = rank_candidates(me, pool, SIGNALS, now=now, top_k=5)

	assert top == full[:5]
	assert rank_candidates(me, pool, SIGNALS, now=now, top_k=100) == full


@pytest.mark.parametrize("seed", [None, 0, 42])
def test_explore_only_reorders_head(make_profile, now, seed):
	me = make_profile("me")
	ranked = rank_candidates(me, [make_profile(f"u{i:02d}") for i in range(20)], SIGNALS, now=now)

	explored = explore(ranked, seed=seed, window=5)

	assert explored[5:] == ranked[5:]
	assert sorted(r.user_id for r in explored[:5]) == sorted(r.user_id for r in ranked[:5])
	assert [r.score for r in explored] == [r.score for r in ranked]
	if seed is None:
		assert explored == ranked
	assert explore(ranked, seed=seed, window=5) == explored
