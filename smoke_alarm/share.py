# smoke_alarm/share.py
# Share summary for social posts.

from datetime import date
from typing import Optional
from urllib.parse import quote

from .display import cigarettes_badge, format_concentration, pollutant_name
from .schemas import AirQualityReport

TWEET_INTENT_URL = "https://twitter.com/intent/tweet?text="
HASHTAGS = "#AQHigh #AirQuality #OpenWeather #ClimateAction"


def _long_date(d: date) -> str:
    return f"{d:%A, %B} {d.day}, {d.year}"


def share_text(report: AirQualityReport, today: Optional[date] = None) -> str:
    today = today or date.today()
    result = report.result

    if result.cigarettes >= 1:
        cig_line = f"🚬 Cigarette Equivalent: {cigarettes_badge(result.cigarettes)} cigs/day"
    else:
        cig_line = "🫁 Breathing: Healthy"

    dominant = result.sub_aqis.get(result.dominant_pollutant or "")
    if result.aqi <= 50:
        status_line = "✨ Status: Clean Air & Healthy Atmosphere"
    elif dominant is not None:
        status_line = f"⚠️ Highest Pollutant: {pollutant_name(dominant.key)} ({format_concentration(dominant)})"
    else:
        status_line = "⚠️ PM2.5: N/A"

    return (
        f"Today's Air Quality in {report.city}\n\n"
        f"🌍 AQI: {result.aqi}\n"
        f"{cig_line}\n"
        f"{status_line}\n"
        f"📅 {_long_date(today)}\n\n"
        f"{HASHTAGS}"
    )


def tweet_url(text: str) -> str:
    return TWEET_INTENT_URL + quote(text, safe="")
