# smoke_alarm/streak.py
# "Recent days" strip and forecast outlook: hourly pollution samples -> one
# AQI summary per day.

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from .aqi import aqi_for_components, round_half_up
from .schemas import DailyAQI, PollutionSample


def _daily_rows(samples: Iterable[PollutionSample], extrapolate: bool) -> List[DailyAQI]:
    by_day: Dict[date, List[int]] = defaultdict(list)
    for s in samples:
        result = aqi_for_components(s.components, extrapolate=extrapolate)
        if not result.sub_aqis:
            continue
        by_day[s.measured_at.date()].append(result.aqi)

    return [
        DailyAQI(day=d, avg=round_half_up(sum(v) / len(v)), min=min(v), max=max(v))
        for d, v in by_day.items()
    ]


def daily_streak(samples: Iterable[PollutionSample], *, days: int = 7, extrapolate: bool = False) -> List[DailyAQI]:
    """
    Group samples by UTC calendar day and summarise each day's overall AQI.
    Most recent day first, at most ``days`` rows.
    """
    out = _daily_rows(samples, extrapolate)
    out.sort(key=lambda row: row.day, reverse=True)
    return out[: max(0, days)]


def daily_outlook(
    samples: Iterable[PollutionSample], *, today: date, days: int = 4, extrapolate: bool = False
) -> List[DailyAQI]:
    """Forecast counterpart of daily_streak: from ``today`` on, soonest first."""
    out = [row for row in _daily_rows(samples, extrapolate) if row.day >= today]
    out.sort(key=lambda row: row.day)
    return out[: max(0, days)]
