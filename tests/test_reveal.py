"""
Unit tests for the reveal policy. Pure functions, explicit clock.
"""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from app.services.reveal import (
    all_submitted,
    evaluate_reveal,
    is_past_cutoff,
    should_reveal,
    today_in_zone,
)

CHICAGO = ZoneInfo("America/Chicago")
DAY = date(2026, 2, 20)


def chicago(hour, minute=0, second=0, day=DAY):
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=CHICAGO)


class TestQuorum:
    def test_case_insensitive_quorum_reveals_any_time(self):
        now = chicago(0, 5)
        assert should_reveal(["A", "B"], {"a", "b"}, now, DAY, CHICAGO) is True

    def test_partial_submission_before_cutoff_stays_hidden(self):
        assert should_reveal(["A", "B"], {"a"}, chicago(9), DAY, CHICAGO) is False

    def test_extra_submitters_do_not_matter(self):
        assert all_submitted(["Joe"], ["joe", "stranger"]) is True

    def test_empty_roster_is_never_a_quorum(self):
        assert all_submitted([], ["anyone"]) is False

    def test_roster_truncated_to_max(self):
        roster = [f"P{i}" for i in range(12)]
        submitted = [f"p{i}" for i in range(10)]
        status = evaluate_reveal(roster, submitted, chicago(9), DAY, CHICAGO, max_roster=10)
        assert status.players == roster[:10]
        assert status.all_submitted is True
        assert status.reveal is True


class TestCutoff:
    def test_exactly_cutoff_reveals(self):
        assert should_reveal(["A", "B"], set(), chicago(13, 0, 0), DAY, CHICAGO) is True

    def test_one_second_before_cutoff_hidden(self):
        assert should_reveal(["A", "B"], set(), chicago(12, 59, 59), DAY, CHICAGO) is False

    def test_cutoff_uses_reference_zone_not_utc(self):
        # 13:30 UTC is 07:30 in Chicago
        now = datetime(2026, 2, 20, 13, 30, tzinfo=timezone.utc)
        assert is_past_cutoff(DAY, now, CHICAGO) is False

    def test_naive_now_is_treated_as_utc(self):
        naive = datetime(2026, 2, 20, 19, 0)  # 13:00 in Chicago
        assert is_past_cutoff(DAY, naive, CHICAGO) is True

    def test_custom_cutoff_hour(self):
        assert should_reveal(["A"], set(), chicago(18), DAY, CHICAGO, cutoff_hour=19) is False


class TestOtherDays:
    def test_yesterday_always_revealed(self):
        yesterday = DAY - timedelta(days=1)
        assert should_reveal(["A", "B"], set(), chicago(0, 1), yesterday, CHICAGO) is True

    @pytest.mark.parametrize("submitted", [set(), {"a"}, {"a", "b"}])
    def test_yesterday_any_submitted_set(self, submitted):
        assert should_reveal(["A", "B"], submitted, chicago(8), DAY - timedelta(days=1), CHICAGO)

    def test_today_is_computed_in_zone(self):
        # 03:00 UTC on the 21st is still the 20th in Chicago
        now = datetime(2026, 2, 21, 3, 0, tzinfo=timezone.utc)
        assert today_in_zone(now, CHICAGO) == DAY


class TestEmptyRoster:
    def test_empty_roster_never_reveals_today(self):
        assert should_reveal([], set(), chicago(23), DAY, CHICAGO) is False

    def test_empty_roster_never_reveals_past_day(self):
        assert should_reveal([], {"x"}, chicago(9), DAY - timedelta(days=3), CHICAGO) is False


class TestStatusDetail:
    def test_submitted_by_uses_roster_spelling(self):
        status = evaluate_reveal(["Joe", "Pete"], ["JOE"], chicago(9), DAY, CHICAGO)
        assert status.submitted_by == ["Joe"]
        assert status.all_submitted is False
        assert status.past_cutoff is False
        assert status.reveal is False
        assert status.day == DAY
