"""
Command line front end.

    smoke-alarm city Delhi --share
    smoke-alarm coords 28.6139 77.2090 --json
    smoke-alarm calc pm2_5=35.4 co=1000 --units openweather
"""

import argparse
import logging
import sys
from typing import List, Optional

from .aqi import calculate_aqi
from .config import load_settings
from .display import cigarettes_badge, cigarettes_short, health_message, metric_lines
from .errors import ConfigurationError, SmokeAlarmError
from .logging_config import setup_logging
from .schemas import AirQualityReport, AQIResult
from .service import build_service
from .share import share_text, tweet_url
from .units import UNIT_CONVENTIONS, readings_from_pairs

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="smoke-alarm", description="Air quality as AQI and cigarettes per day")
    p.add_argument("--log-level", default=None, help="Override SMOKE_ALARM_LOG_LEVEL")
    sub = p.add_subparsers(dest="command", required=True)

    city = sub.add_parser("city", help="Look up a city by name")
    city.add_argument("name", nargs="+")

    coords = sub.add_parser("coords", help="Look up coordinates")
    coords.add_argument("lat", type=float)
    coords.add_argument("lon", type=float)

    for lookup in (city, coords):
        # stdout carries either JSON or text, never both
        output = lookup.add_mutually_exclusive_group()
        output.add_argument("--share", action="store_true", help="Print the share text and tweet link")
        output.add_argument("--json", action="store_true", help="Print the report as JSON")

    calc = sub.add_parser("calc", help="Compute AQI offline from KEY=VALUE readings")
    calc.add_argument("readings", nargs="+", metavar="KEY=VALUE")
    calc.add_argument("--units", choices=sorted(UNIT_CONVENTIONS), default="openweather",
                      help="Unit convention the values are in (default: openweather, all µg/m³)")
    calc.add_argument("--extrapolate", action="store_true", help="Extrapolate above the top breakpoint")
    calc.add_argument("--json", action="store_true")
    return p.parse_args(argv)


def _print_result(result: AQIResult) -> None:
    print(f"AQI {result.aqi} ({result.category})")
    if result.dominant_pollutant:
        print(f"Dominant pollutant: {result.dominant_pollutant}")
    print(f"Cigarettes/day: {cigarettes_short(result.cigarettes)} (×{cigarettes_badge(result.cigarettes)})")
    for line in metric_lines(result):
        print(f"  {line}")
    for s in result.skipped:
        print(f"  skipped {s.key}: {s.reason}")


def _print_report(report: AirQualityReport) -> None:
    print(report.city)
    _print_result(report.result)
    print(report.health_message)
    if report.fallback_notice:
        print(f"! {report.fallback_notice}")
    if report.alert_message:
        print(f"! {report.alert_message}")
    if report.recent_days:
        print("Recent days:")
        for d in report.recent_days:
            print(f"  {d.day.isoformat()}  avg {d.avg}  range {d.min}-{d.max}")
    if report.forecast_days:
        print("Coming days:")
        for d in report.forecast_days:
            print(f"  {d.day.isoformat()}  avg {d.avg}  range {d.min}-{d.max}")


def run_calc(args: argparse.Namespace) -> int:
    try:
        readings = readings_from_pairs(args.readings, UNIT_CONVENTIONS[args.units])
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    result = calculate_aqi(readings, extrapolate=args.extrapolate)
    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        _print_result(result)
        print(health_message(result.cigarettes))
    return 0


def run_lookup(args: argparse.Namespace, settings) -> int:
    service = build_service(settings)
    if args.command == "city":
        report = service.report_for_city(" ".join(args.name))
    else:
        report = service.report_for_coordinates(args.lat, args.lon)

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        _print_report(report)
    if args.share:
        text = share_text(report)
        print()
        print(text)
        print(tweet_url(text))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings()
        setup_logging(args.log_level or settings.log_level)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.command == "calc":
        return run_calc(args)
    try:
        return run_lookup(args, settings)
    except SmokeAlarmError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
