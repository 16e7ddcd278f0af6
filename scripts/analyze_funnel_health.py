from __future__ import annotations

import argparse
import json
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report conversion red zones for aggregated funnel totals."
    )
    parser.add_argument(
        "totals_file",
        help="JSON file with funnel totals (camelCase or snake_case keys), or '-' for stdin.",
    )
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    parser.add_argument(
        "--critical-only",
        action="store_true",
        help="Only list stages more than 10 points under their benchmark.",
    )
    parser.add_argument(
        "--fail-on-critical",
        action="store_true",
        help="Exit with status 1 when any critical red zone is found.",
    )
    return parser.parse_args()


def read_totals(path: str) -> dict:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as totals_file:
        return json.load(totals_file)


def main() -> int:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    from salespipe.api.dependencies import get_funnel_service
    from salespipe.schemas.funnel import FunnelRequest, FunnelTotals

    totals = FunnelTotals.model_validate(read_totals(args.totals_file))
    analysis = get_funnel_service().analyze(FunnelRequest(totals=totals))

    red_zones = analysis.red_zones
    if args.critical_only:
        red_zones = [zone for zone in red_zones if zone.severity == "critical"]

    report = {
        "northStarKpi": analysis.north_star_kpi.model_dump(by_alias=True),
        "totalConversion": analysis.total_conversion,
        "redZones": [zone.model_dump(by_alias=True) for zone in red_zones],
    }
    print(json.dumps(report, indent=2, default=str, ensure_ascii=False))

    if args.fail_on_critical and any(zone.severity == "critical" for zone in analysis.red_zones):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
