"""Command line entry point: rp-planner value|plan|efficiency|export"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
from .catalog import current_tiers, resolve_base_tier, resolve_preset
from .config import load_settings
from .efficiency import print_efficiency_summary
from .exceptions import InternalInvariant, InvalidInput
from .logging_utils import configure_logging, get_logger
from .planner import generate_plan, print_plan_summary
from .converter import save_to_csv, save_to_docplex, save_to_excel
from .valuation import cash_value, describe_rate, format_money, parse_units

logger = get_logger(__name__)

EXIT_INVALID_INPUT = 2
EXIT_INTERNAL = 3

def _target_from_args(args) -> int:
    if getattr(args, 'preset', None):
        return resolve_preset(args.preset)
    if args.target is None:
        raise InvalidInput("Provide a target RP amount or --preset")
    return args.target

def cmd_value(args, settings) -> int:
    base = resolve_base_tier(current_tiers(settings), settings)
    units = parse_units(args.units)
    print(f"{args.units} RP = {format_money(cash_value(units, base))}")
    print(describe_rate(base))
    return 0

def cmd_plan(args, settings) -> int:
    target = _target_from_args(args)
    plan = generate_plan(target, settings)
    print_plan_summary(plan, target)
    return 0

def cmd_efficiency(args, settings) -> int:
    print_efficiency_summary(current_tiers(settings), settings.base_tier_id)
    return 0

def cmd_export(args, settings) -> int:
    target = _target_from_args(args)
    plan = generate_plan(target, settings)

    out = Path(args.out)
    if out.suffix.lower() == '.csv':
        save_to_csv(plan, out)
    else:
        save_to_excel(plan, target, out)

    # An empty plan has no integer model to export
    if args.lp and target > 0:
        save_to_docplex(current_tiers(settings), target, args.lp)
    elif args.lp:
        print(f"Skipping LP export for non-positive target {target}")
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='rp-planner', description="RP value and purchase planning")
    parser.add_argument('--config', type=Path, default=None, help="YAML settings file")
    parser.add_argument('--verbose', action='store_true', help="Enable debug logging")

    sub = parser.add_subparsers(dest='command', required=True)

    value = sub.add_parser('value', help="Cash value of an RP amount")
    value.add_argument('units')
    value.set_defaults(func=cmd_value)

    plan = sub.add_parser('plan', help="Cheapest packages reaching a target")
    plan.add_argument('target', type=int, nargs='?')
    plan.add_argument('--preset', help="Skin preset name, e.g. legendary")
    plan.set_defaults(func=cmd_plan)

    eff = sub.add_parser('efficiency', help="Compare package efficiency")
    eff.set_defaults(func=cmd_efficiency)

    export = sub.add_parser('export', help="Write a plan to .xlsx or .csv")
    export.add_argument('target', type=int, nargs='?')
    export.add_argument('--preset')
    export.add_argument('--out', required=True)
    export.add_argument('--lp', default=None, help="Also export the integer model as LP")
    export.set_defaults(func=cmd_export)

    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = load_settings(args.config)
        return args.func(args, settings)
    except InvalidInput as e:
        logger.debug("Invalid input", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except InternalInvariant as e:
        logger.debug("Internal invariant failed", exc_info=True)
        print(f"internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL

if __name__ == "__main__":
    sys.exit(main())
