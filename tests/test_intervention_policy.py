"""Unit tests for intervention policy and priority."""

from datetime import datetime, timedelta, timezone

from moodcoach.services.intervention.intervention_policy import (
    build_intervention_context,
    calculate_intervention_priority,
    rank_interventions,
    select_intervention_template,
    should_generate_intervention,
)

from factories import TODAY, at, make_checkin, make_context, make_history, make_traits


NOW = at(TODAY, 15)


# ─────────────────────────────────────────────────────────────────
# should_generate_intervention
# ─────────────────────────────────────────────────────────────────


class TestShouldGenerate:
    def test_no_checkins(self):
        assert should_generate_intervention([]) is False

    def test_engaged_user(self):
        assert should_generate_intervention(make_history([3, 3, 3]), now=NOW) is True

    def test_once_per_day(self):
        earlier_today = at(TODAY, 8)
        history = make_history([1, 1, 1])
        assert should_generate_intervention(history, earlier_today, now=NOW) is False

    def test_intervention_yesterday_allows_another(self):
        yesterday = NOW - timedelta(days=1)
        assert should_generate_intervention(make_history([3, 3, 3]), yesterday, now=NOW) is True

    def test_naive_timestamp_treated_as_utc(self):
        naive = datetime(TODAY.year, TODAY.month, TODAY.day, 9)
        assert should_generate_intervention(make_history([3, 3, 3]), naive, now=NOW) is False

    def test_low_mood_with_few_checkins(self):
        assert should_generate_intervention(make_history([2, 2]), now=NOW) is True

    def test_neutral_with_few_checkins(self):
        assert should_generate_intervention(make_history([3, 3]), now=NOW) is False

    def test_single_good_checkin(self):
        assert should_generate_intervention([make_checkin(mood=5)], now=NOW) is False


# ─────────────────────────────────────────────────────────────────
# select_intervention_template
# ─────────────────────────────────────────────────────────────────


class TestSelectTemplate:
    def test_boundaries(self):
        assert select_intervention_template(1.0) == "compassion"
        assert select_intervention_template(2.5) == "compassion"
        assert select_intervention_template(2.6) == "reflection"
        assert select_intervention_template(3.5) == "reflection"
        assert select_intervention_template(3.6) == "action"
        assert select_intervention_template(5.0) == "action"


# ─────────────────────────────────────────────────────────────────
# calculate_intervention_priority
# ─────────────────────────────────────────────────────────────────


class TestPriority:
    def test_baseline_is_zero(self):
        context = make_context(mood_average=4.0, recent_checkins=1)
        assert calculate_intervention_priority(context) == 0

    def test_worst_case(self):
        context = make_context(
            mood_average=1.5,
            mood_trend="declining",
            energy_level="low",
            recent_checkins=7,
            streak_days=7,
        )
        # 10 + 5 + 3 + 2 + 3
        assert calculate_intervention_priority(context) == 23

    def test_mood_bands(self):
        assert calculate_intervention_priority(make_context(mood_average=2.0, recent_checkins=0)) == 10
        assert calculate_intervention_priority(make_context(mood_average=2.5, recent_checkins=0)) == 7
        assert calculate_intervention_priority(make_context(mood_average=3.0, recent_checkins=0)) == 4
        assert calculate_intervention_priority(make_context(mood_average=3.1, recent_checkins=0)) == 0

    def test_improving_and_engagement(self):
        context = make_context(mood_average=4.0, mood_trend="improving", recent_checkins=3)
        assert calculate_intervention_priority(context) == 4

    def test_low_energy_needs_low_mood(self):
        context = make_context(mood_average=4.0, energy_level="low", recent_checkins=0)
        assert calculate_intervention_priority(context) == 0

    def test_rank_most_urgent_first(self):
        calm = make_context(mood_average=4.5, recent_checkins=0)
        struggling = make_context(mood_average=1.5, mood_trend="declining", recent_checkins=0)
        tied = make_context(mood_average=4.4, recent_checkins=0)

        assert rank_interventions([calm, struggling, tied]) == [struggling, calm, tied]


# ─────────────────────────────────────────────────────────────────
# build_intervention_context
# ─────────────────────────────────────────────────────────────────


class TestBuildContext:
    def test_uses_history_and_current_checkin(self):
        history = make_history([2, 2, 4, 4], energy="mid")
        current = make_checkin(mood=2, energy="low", free_text="rough day")
        traits = make_traits(neuroticism=0.9)

        context = build_intervention_context(history, current, personality_traits=traits, today=TODAY)

        assert context.mood_average == 3.0
        assert context.mood_trend == "declining"
        assert context.energy_level == "low"
        assert context.free_text == "rough day"
        assert context.recent_checkins == 4
        assert context.streak_days == 4
        assert context.personality_traits is traits

    def test_empty_history_is_neutral(self):
        context = build_intervention_context([], make_checkin(), today=TODAY)
        assert context.mood_average == 3.0
        assert context.streak_days == 0
