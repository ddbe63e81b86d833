"""
Tests for Business Time Arithmetic.

Tests backward anchoring, business day addition and business hour addition.
"""

from datetime import datetime

import pytest

from business_time.core.business_time import (
    add_business_days,
    add_business_hours,
    adjust_to_previous_working_time,
    advance_to_window_start,
)
from business_time.core.work_calendar import CIVIL_TIMEZONE


NO_HOLIDAYS = frozenset()
EASTER_HOLIDAYS = frozenset({"2025-04-17", "2025-04-18"})


def civil(year, month, day, hour=0, minute=0, second=0):
    return datetime(year, month, day, hour, minute, second, tzinfo=CIVIL_TIMEZONE)


class TestAdjustToPreviousWorkingTime:
    """Tests for adjust_to_previous_working_time."""

    def test_inside_morning_is_unchanged(self):
        """Should leave a morning instant untouched."""
        start = civil(2025, 8, 6, 9, 30)
        assert adjust_to_previous_working_time(start, NO_HOLIDAYS) == start

    def test_inside_afternoon_is_unchanged(self):
        """Should leave an afternoon instant untouched."""
        start = civil(2025, 8, 6, 15, 45, 10)
        assert adjust_to_previous_working_time(start, NO_HOLIDAYS) == start

    def test_after_closing_goes_to_same_day_end(self):
        """Should move an evening instant back to 17:00."""
        result = adjust_to_previous_working_time(civil(2025, 8, 6, 19, 20), NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 17, 0)

    def test_lunch_goes_back_to_noon(self):
        """Should move a lunch instant back to 12:00."""
        result = adjust_to_previous_working_time(civil(2025, 8, 6, 12, 30), NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 12, 0)

    def test_before_opening_goes_to_previous_day_end(self):
        """Should move an early instant to the previous day's close."""
        result = adjust_to_previous_working_time(civil(2025, 8, 6, 7, 0), NO_HOLIDAYS)
        assert result == civil(2025, 8, 5, 17, 0)

    def test_monday_before_opening_skips_weekend(self):
        """Should move early Monday back to Friday 17:00."""
        result = adjust_to_previous_working_time(civil(2025, 8, 4, 6, 0), NO_HOLIDAYS)
        assert result == civil(2025, 8, 1, 17, 0)

    def test_weekend_goes_to_friday_end(self):
        """Should move a weekend instant back to Friday 17:00."""
        result = adjust_to_previous_working_time(civil(2025, 8, 2, 14, 0), NO_HOLIDAYS)
        assert result == civil(2025, 8, 1, 17, 0)

    def test_holiday_next_to_weekend_is_skipped_transitively(self):
        """Should skip a weekend and the holidays before it."""
        # Sunday 2025-04-20, preceded by a weekend and two holidays
        result = adjust_to_previous_working_time(civil(2025, 4, 20, 10, 0), EASTER_HOLIDAYS)
        assert result == civil(2025, 4, 16, 17, 0)

    def test_before_opening_after_holidays_and_weekend(self):
        """Should skip weekend and holidays from an early Monday."""
        result = adjust_to_previous_working_time(civil(2025, 4, 21, 7, 0), EASTER_HOLIDAYS)
        assert result == civil(2025, 4, 16, 17, 0)

    def test_seconds_past_closing_anchor_to_whole_minute(self):
        """Should drop the seconds when anchoring just after closing."""
        result = adjust_to_previous_working_time(civil(2025, 8, 1, 17, 0, 30), NO_HOLIDAYS)
        assert result == civil(2025, 8, 1, 17, 0)

    @pytest.mark.parametrize(
        "start",
        [
            civil(2025, 8, 2, 14, 0),
            civil(2025, 8, 6, 12, 30),
            civil(2025, 8, 6, 7, 0),
            civil(2025, 8, 6, 21, 0),
            civil(2025, 8, 6, 10, 15),
        ],
    )
    def test_anchoring_is_idempotent(self, start):
        """Should return an anchored instant unchanged."""
        anchored = adjust_to_previous_working_time(start, NO_HOLIDAYS)
        assert adjust_to_previous_working_time(anchored, NO_HOLIDAYS) == anchored


class TestAddBusinessDays:
    """Tests for add_business_days."""

    def test_preserves_time_of_day(self):
        """Should keep the clock time when adding days."""
        result = add_business_days(civil(2025, 8, 5, 15, 0), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 15, 0)

    def test_friday_plus_one_is_monday(self):
        """Should roll Friday plus one day over to Monday."""
        result = add_business_days(civil(2025, 8, 1, 17, 0), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 4, 17, 0)

    def test_skips_holidays_and_weekend(self):
        """Should skip holidays and the weekend when adding days."""
        # Wednesday 2025-04-16 + 1 skips Thu/Fri holidays and the weekend
        result = add_business_days(civil(2025, 4, 16, 10, 0), 1, EASTER_HOLIDAYS)
        assert result == civil(2025, 4, 21, 10, 0)

    def test_noon_stays_at_noon(self):
        """Should keep a 12:00 start at 12:00."""
        result = add_business_days(civil(2025, 8, 6, 12, 0), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 7, 12, 0)

    def test_lunch_landing_snaps_to_noon(self):
        """Should snap a lunch-time result back to 12:00."""
        result = add_business_days(civil(2025, 8, 6, 12, 40), 2, NO_HOLIDAYS)
        assert result == civil(2025, 8, 8, 12, 0)


class TestAddBusinessHours:
    """Tests for add_business_hours."""

    def test_within_morning(self):
        """Should add hours inside the morning window."""
        result = add_business_hours(civil(2025, 8, 6, 8, 0), 2, NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 10, 0)

    def test_crosses_lunch(self):
        """Should skip the lunch hour."""
        result = add_business_hours(civil(2025, 8, 6, 11, 30), 3, NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 15, 30)

    def test_full_day_ends_at_closing(self):
        """Should end a full eight-hour day at 17:00."""
        result = add_business_hours(civil(2025, 8, 6, 8, 0), 8, NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 17, 0)

    def test_closing_time_rolls_to_next_morning(self):
        """Should continue from 17:00 on the next working morning."""
        result = add_business_hours(civil(2025, 8, 1, 17, 0), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 4, 9, 0)

    def test_lunch_start_moves_forward_to_afternoon(self):
        """Should start counting at 13:00 from a lunch start."""
        result = add_business_hours(civil(2025, 8, 6, 12, 0), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 14, 0)

    def test_before_opening_starts_at_opening(self):
        """Should start counting at 08:00 from an early start."""
        result = add_business_hours(civil(2025, 8, 6, 6, 0), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 6, 9, 0)

    def test_after_closing_starts_next_working_morning(self):
        """Should start on the next working morning after closing."""
        result = add_business_hours(civil(2025, 4, 16, 18, 0), 1, EASTER_HOLIDAYS)
        assert result == civil(2025, 4, 21, 9, 0)

    def test_non_working_day_in_window(self):
        """Should start on the next working day from a weekend."""
        result = add_business_hours(civil(2025, 8, 2, 14, 0), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 4, 9, 0)

    def test_keeps_minutes_and_seconds(self):
        """Should carry minutes and seconds across days."""
        result = add_business_hours(civil(2025, 8, 6, 16, 15, 30), 1, NO_HOLIDAYS)
        assert result == civil(2025, 8, 7, 8, 15, 30)

    def test_spans_several_days(self):
        """Should spread many hours across several days."""
        # 20 hours from Wednesday 10:00: 6h Wed, 8h Thu, 6h Fri
        result = add_business_hours(civil(2025, 8, 6, 10, 0), 20, NO_HOLIDAYS)
        assert result == civil(2025, 8, 8, 15, 0)


class TestAdvanceToWindowStart:
    """Tests for advance_to_window_start."""

    def test_lunch_goes_to_afternoon_start(self):
        """Should advance a lunch instant to 13:00."""
        assert advance_to_window_start(civil(2025, 8, 6, 12, 10), NO_HOLIDAYS) == civil(2025, 8, 6, 13, 0)

    def test_after_closing_on_friday_goes_to_monday(self):
        """Should advance Friday evening to Monday 08:00."""
        assert advance_to_window_start(civil(2025, 8, 1, 18, 0), NO_HOLIDAYS) == civil(2025, 8, 4, 8, 0)

    def test_before_opening_on_holiday_goes_to_next_working_day(self):
        """Should advance past holidays and the weekend."""
        assert advance_to_window_start(civil(2025, 4, 17, 6, 0), EASTER_HOLIDAYS) == civil(2025, 4, 21, 8, 0)
