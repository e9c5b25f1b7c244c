#!/usr/bin/env python3
"""
fairmint CLI

Commands for checking a fair-mint launch before submitting it:
- Preview the emission curve, totals and fee estimates
- Print the per-era schedule
- Validate the launch parameters (exit code 1 when invalid)
- Serve the preview API for the launch page
"""

import argparse
import json
import logging
import sys

from fairmint import config as settings
from fairmint.version import __version__
from fairmint.core.economics import (
    DEFAULT_LAUNCH_PARAMS,
    FIELD_SPECS,
    EmissionPreview,
    format_base_units,
    format_days,
    format_seconds,
    normalize_params,
    preview_config,
)

logger = logging.getLogger(__name__)

GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
GRAY = '\033[90m'
RESET = '\033[0m'


# Options whose name differs from the kebab-cased field name
OPTION_NAMES = {
    "fee_rate_base_units": "--fee-rate",  # SOL per mint, stored in lamports
}


def add_launch_arguments(parser):
    """One --kebab-case option per launch parameter, defaulting to the form defaults."""
    for name, spec in FIELD_SPECS.items():
        unit = " (display units, x10^9)" if spec.scaled else ""
        parser.add_argument(
            OPTION_NAMES.get(name, "--" + name.replace("_", "-")),
            dest=name,
            type=str,
            default=DEFAULT_LAUNCH_PARAMS[name],
            help=f"{spec.label}{unit} [default: {DEFAULT_LAUNCH_PARAMS[name]}]",
        )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")


def raw_values(args) -> dict:
    return {name: getattr(args, name) for name in FIELD_SPECS}


def load_preview(args):
    """Build the preview, or None (after printing why) when it is too long to render."""
    params = normalize_params(raw_values(args))
    if params.config.target_eras > settings.MAX_PREVIEW_ERAS:
        print(f"{RED}Target eras above {settings.MAX_PREVIEW_ERAS} cannot be previewed{RESET}",
              file=sys.stderr)
        return None
    return preview_config(params)


def format_validation(preview: EmissionPreview) -> str:
    result = preview.validation
    if result.is_valid:
        return f"{GREEN}VALID{RESET}"
    code = result.kind.program_error_code
    suffix = f" (program error {code})" if code else ""
    return f"{RED}INVALID{RESET} {result.message}{suffix}"


def print_field_errors(preview: EmissionPreview):
    for field in preview.field_errors:
        print(f"  {YELLOW}!{RESET} {field.name}: {field.message} (got {field.raw!r})")
    if preview.params.incomplete:
        print(f"  {GRAY}incomplete: {', '.join(preview.params.incomplete)}{RESET}")


def cmd_preview(args):
    """Show totals and launch estimates."""
    preview = load_preview(args)
    if preview is None:
        return 2

    if args.json:
        print(json.dumps(preview.to_dict(include_schedule=False), indent=2))
        return 0 if preview.can_submit else 1

    m = preview.metrics
    e = preview.estimates
    print(f"\nLaunch preview: {format_validation(preview)}")
    print_field_errors(preview)
    print("=" * 60)
    print(f"  Total supply:        {format_base_units(m.total_supply)}")
    print(f"  Community supply:    {format_base_units(m.community_supply)}")
    print(f"  Liquidity supply:    {format_base_units(m.liquidity_supply)}")
    print(f"  Max supply:          "
          f"{format_base_units(e.max_supply) if e.max_supply is not None else 'unbounded'}"
          f" ({e.percent_of_max_supply}% reached)")
    print(f"  Liquidity share:     {e.liquidity_percent_of_max_supply}% of max supply")
    print(f"  Minting time:        {format_days(m.total_duration_seconds)}")
    print(f"  Fee revenue:         {format_base_units(m.total_fee_revenue)} SOL")

    def sol(value):
        return "n/a" if value is None else f"{format_base_units(value)} SOL"

    warn = f" {RED}(too high){RESET}" if e.fee_too_high else ""
    print(f"  Total fee range:     {sol(e.min_total_fee)} .. {sol(e.max_total_fee)}{warn}")
    warn = f" {RED}(too high){RESET}" if e.launch_price_too_high else ""
    print(f"  Launch price range:  {e.min_launch_price} .. {e.max_launch_price} SOL/token{warn}")
    print()
    return 0 if preview.can_submit else 1


def cmd_schedule(args):
    """Print the per-era schedule."""
    preview = load_preview(args)
    if preview is None:
        return 2

    records = list(preview.schedule)[:args.limit] if args.limit else list(preview.schedule)
    if args.json:
        print(json.dumps([r.to_dict() for r in records], indent=2))
        return 0

    print(f"\n{'Era':>5}  {'Target/epoch':>22}  {'Era supply':>26}  {'Cumulative':>26}  Starts after")
    print("-" * 100)
    for r in records:
        print(f"{r.era_index:>5}  {format_base_units(r.target_mint_size_per_epoch):>22}  "
              f"{format_base_units(r.era_supply):>26}  {format_base_units(r.cumulative_supply):>26}  "
              f"{format_seconds(r.start_offset_seconds)}")
    hidden = len(preview.schedule) - len(records)
    if hidden > 0:
        print(f"{GRAY}... {hidden} more eras{RESET}")
    print()
    return 0


def cmd_validate(args):
    """Exit 0 when the launch may be submitted, 1 otherwise."""
    preview = load_preview(args)
    if preview is None:
        return 2

    if args.json:
        data = preview.validation.to_dict()
        data["field_errors"] = [f.to_dict() for f in preview.field_errors]
        print(json.dumps(data, indent=2))
    else:
        print(format_validation(preview))
        print_field_errors(preview)
    return 0 if preview.can_submit else 1


def cmd_serve(args):
    """Run the preview API."""
    import uvicorn

    logger.info(f"Serving preview API on {args.host}:{args.port}")
    uvicorn.run("fairmint.api.main:app", host=args.host, port=args.port, log_level=settings.LOG_LEVEL.lower())
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="fairmint launch CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview the default launch
  fairmint preview

  # Ten eras, 80% kept per era
  fairmint preview --target-eras 10 --reduce-ratio-percent 80

  # Print the first 20 eras
  fairmint schedule --target-eras 100 --limit 20

  # Use as a pre-submit guard
  fairmint validate --liquidity-tokens-ratio-percent 60 || echo "blocked"

  # Serve the preview API
  fairmint serve --port 8000
        """
    )

    parser.add_argument(
        "--version", action="version",
        version=f"fairmint {__version__}"
    )
    parser.add_argument("--log-level", type=str, default=None, help="Override FAIRMINT_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Show totals and estimates")
    add_launch_arguments(preview_parser)

    # Schedule command
    schedule_parser = subparsers.add_parser("schedule", help="Print the per-era schedule")
    add_launch_arguments(schedule_parser)
    schedule_parser.add_argument("--limit", type=int, default=0, help="Max eras to print (0 = all)")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check the launch parameters")
    add_launch_arguments(validate_parser)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Serve the preview API")
    serve_parser.add_argument("--host", type=str, default=settings.HOST)
    serve_parser.add_argument("--port", type=int, default=settings.PORT)

    args = parser.parse_args(argv)
    settings.configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handler
    commands = {
        'preview': cmd_preview,
        'schedule': cmd_schedule,
        'validate': cmd_validate,
        'serve': cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
