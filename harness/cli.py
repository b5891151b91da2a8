"""
Command-line entry point.

    harness list
    harness run booking tracking          # whole groups, in the order given
    harness run booking/create_booking    # one scenario
    harness handoff get latest-booking-id
    harness handoff set latest-booking-id B100
    harness handoff list
    harness handoff clear [KEY]

`run` exits 0 only when every selected scenario completed. `handoff get`
exits 1 when the key has never been saved.
"""

import argparse
import logging
import sys

from harness.config import settings
from harness.errors import MissingStateError
from harness.providers.selenium_surface import open_surface
from harness.scenarios.registry import SCENARIO_GROUPS, resolve
from harness.services.handoff_store import HandoffStore
from harness.services.scenario_runner import ScenarioReport, ScenarioRunner

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="harness", description="Logistics booking UI automation harness")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, ...).")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="List scenario groups and their scenarios.")

    p_run = sub.add_parser("run", help="Run scenario groups (or group/scenario) against a live browser.")
    p_run.add_argument("selectors", nargs="+", help="Group names or group/scenario names.")
    p_run.add_argument("--headful", action="store_true", help="Show the browser window for debugging.")
    p_run.add_argument("--timeout", type=float, default=None, help="Per-scenario time budget in seconds.")
    p_run.add_argument("--handoff-dir", default=None, help="Directory holding handoff files.")

    p_handoff = sub.add_parser("handoff", help="Read or edit values handed off between runs.")
    p_handoff.add_argument("--handoff-dir", default=None, help="Directory holding handoff files.")
    h_sub = p_handoff.add_subparsers(dest="handoff_cmd", required=True)
    h_get = h_sub.add_parser("get", help="Print the value stored under KEY.")
    h_get.add_argument("key")
    h_set = h_sub.add_parser("set", help="Store VALUE under KEY, replacing any previous value.")
    h_set.add_argument("key")
    h_set.add_argument("value")
    h_sub.add_parser("list", help="List stored keys.")
    h_clear = h_sub.add_parser("clear", help="Delete KEY, or every key when none is given.")
    h_clear.add_argument("key", nargs="?")

    return parser


def _print_scenarios() -> None:
    for group, scenarios in SCENARIO_GROUPS.items():
        print(group)
        for scenario in scenarios:
            print(f"  {scenario.qualified_name:<40} {scenario.description}")


def _print_summary(reports: list[ScenarioReport]) -> None:
    print()
    for report in reports:
        outcome = report.status.value.upper()
        line = f"{outcome:<10} {report.scenario} ({report.steps_completed} steps, {report.duration_seconds:.1f}s)"
        if not report.succeeded:
            line += f"\n           last action: {report.last_action}\n           error: {report.error}"
        print(line)
    passed = sum(1 for r in reports if r.succeeded)
    print(f"\n{passed}/{len(reports)} scenarios completed")


def _run(args: argparse.Namespace) -> int:
    try:
        scenarios = resolve(args.selectors)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if not settings.credentials_configured():
        print("error: BOT_EMAIL and BOT_PASSWORD must be set to run scenarios", file=sys.stderr)
        return 2

    runner = ScenarioRunner(
        lambda: open_surface(headless=not args.headful),
        store=HandoffStore(args.handoff_dir),
        timeout=args.timeout,
    )
    reports = runner.run_all(scenarios)
    _print_summary(reports)
    return 0 if all(r.succeeded for r in reports) else 1


def _handoff(args: argparse.Namespace) -> int:
    store = HandoffStore(args.handoff_dir)
    if args.handoff_cmd == "get":
        try:
            print(store.require(args.key))
        except MissingStateError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        return 0
    if args.handoff_cmd == "set":
        store.save(args.key, args.value)
        return 0
    if args.handoff_cmd == "list":
        for key in store.keys():
            print(key)
        return 0
    if args.handoff_cmd == "clear":
        if args.key:
            store.clear(args.key)
        else:
            store.clear_all()
        return 0
    return 2


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.cmd == "list":
        _print_scenarios()
        return 0
    try:
        if args.cmd == "run":
            return _run(args)
        if args.cmd == "handoff":
            return _handoff(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 2


if __name__ == "__main__":
    sys.exit(main())
