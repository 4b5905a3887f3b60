"""Tests for the recent-days AQI strip."""

from datetime import date, datetime, timedelta, timezone

from smoke_alarm.schemas import PollutionSample
from smoke_alarm.streak import daily_outlook, daily_streak


def sample(day, hour, **components):
    return PollutionSample(
        measured_at=datetime(2026, 10, day, hour, tzinfo=timezone.utc),
        components=components,
    )


class TestDailyStreak:
    def test_groups_by_day(self):
        samples = [
            sample(18, 0, pm2_5=9.0),     # 50
            sample(18, 12, pm2_5=35.4),   # 100
            sample(19, 6, pm2_5=0.0),     # 0
        ]
        rows = daily_streak(samples)
        assert [r.day for r in rows] == [date(2026, 10, 19), date(2026, 10, 18)]
        assert (rows[1].avg, rows[1].min, rows[1].max) == (75, 50, 100)
        assert (rows[0].avg, rows[0].min, rows[0].max) == (0, 0, 0)

    def test_average_rounds_half_up(self):
        rows = daily_streak([sample(1, 0, pm2_5=0.0), sample(1, 1, pm10=1)])
        # AQIs 0 and 1 -> 0.5 -> 1
        assert rows[0].avg == 1

    def test_limits_to_most_recent_days(self):
        start = datetime(2026, 10, 1, tzinfo=timezone.utc)
        samples = [
            PollutionSample(measured_at=start + timedelta(days=i), components={"pm2_5": float(i)})
            for i in range(10)
        ]
        rows = daily_streak(samples, days=7)
        assert len(rows) == 7
        assert rows[0].day == date(2026, 10, 10)
        assert rows[-1].day == date(2026, 10, 4)

    def test_samples_without_pollutants_are_ignored(self):
        rows = daily_streak([sample(3, 0, nh3=4.0), sample(3, 1, pm2_5=float("nan"))])
        assert rows == []

    def test_empty(self):
        assert daily_streak([]) == []


class TestDailyOutlook:
    def test_soonest_first_from_today(self):
        samples = [
            sample(21, 0, pm2_5=35.4),   # 100
            sample(18, 23, pm2_5=90.0),  # yesterday, dropped
            sample(19, 23, pm2_5=9.0),   # 50
            sample(20, 1, pm2_5=0.0),    # 0
        ]
        rows = daily_outlook(samples, today=date(2026, 10, 19))
        assert [r.day for r in rows] == [date(2026, 10, 19), date(2026, 10, 20), date(2026, 10, 21)]
        assert [r.avg for r in rows] == [50, 0, 100]

    def test_limits_days(self):
        samples = [sample(d, 0, pm2_5=1.0) for d in range(19, 25)]
        assert len(daily_outlook(samples, today=date(2026, 10, 19), days=4)) == 4
        assert daily_outlook(samples, today=date(2026, 10, 19), days=0) == []
