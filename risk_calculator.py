"""
Risk Calculator CLI

Sizes a single leveraged trade from the command line: position size,
leverage and margin for a given entry and stop-loss, using the account
settings from config/risk.json unless overridden.

Usage:
    python risk_calculator.py --entry 100 --sl 97
    python risk_calculator.py --entry 100 --sl 97 --risk-percent 1 --format markdown
    python risk_calculator.py --entry 100 --sl 97 --sweep-sl 8
    python risk_calculator.py --validate-config --config config/risk.yaml
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, List, Dict

from dotenv import load_dotenv

from risk_management import InvalidInputError, RiskConfig, compute, parse_risk_input
from risk_management.scenario_table import stop_loss_ladder, sweep_stop_losses
from result_formatting import FORMATTERS
from validation.config_validator import (
    ConfigValidationError,
    find_risk_config,
    load_risk_config,
)
from validation.invariants import check_sizing_invariants

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INVALID_INPUT = 2

SWEEP_COLUMNS = [
    "sl_price", "sl_distance_percent", "position_size", "leverage",
    "margin_used", "risk_percent_actual", "margin_capped",
]


def load_env():
    """Load environment configuration."""
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)
    elif Path("config.example.env").exists():
        load_dotenv("config.example.env")


def resolve_config_path(cli_path: Optional[str]) -> Optional[Path]:
    """--config wins, then $RISK_CONFIG_PATH, then config/risk.{json,yaml}."""
    if cli_path:
        return Path(cli_path)
    env_path = os.getenv("RISK_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return find_risk_config(".")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Position size, leverage and margin calculator"
    )
    parser.add_argument("--entry", help="Entry price")
    parser.add_argument("--sl", help="Stop-loss price")
    parser.add_argument("--account-size", help="Account equity (default from config)")
    parser.add_argument("--risk-percent", help="Percent of account to risk (default from config)")
    parser.add_argument(
        "--max-margin-percent",
        help="Max percent of account usable as margin (default from config)"
    )
    parser.add_argument("--max-leverage", help="Max leverage multiplier (default from config)")
    parser.add_argument("--config", help="Path to risk.json / risk.yaml")
    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default="text",
        help="Output format"
    )
    parser.add_argument(
        "--sweep-sl",
        type=int,
        metavar="N",
        help="Also print a table of N stop-loss prices from 0.25x to 2x the given stop distance"
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate the risk config and exit"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def build_form(args: argparse.Namespace, config: RiskConfig) -> Dict[str, str]:
    """Raw form fields: CLI values where given, config defaults otherwise."""
    return {
        "account_size": args.account_size if args.account_size is not None else str(config.account_size),
        "risk_percent": args.risk_percent if args.risk_percent is not None else str(config.risk_percent),
        "max_margin_percent": (
            args.max_margin_percent if args.max_margin_percent is not None
            else str(config.max_margin_percent)
        ),
        "max_leverage": args.max_leverage if args.max_leverage is not None else str(config.max_leverage),
        "entry_price": args.entry,
        "sl_price": args.sl,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    load_env()
    config_path = resolve_config_path(args.config)

    try:
        if config_path is not None:
            config = RiskConfig.from_dict(load_risk_config(str(config_path)))
            logger.info(f"Loaded risk config from {config_path}")
        else:
            logger.warning("No risk config found, using built-in defaults")
            config = RiskConfig()
    except ConfigValidationError as e:
        logger.error(f"Risk config validation failed: {e}")
        print(f"Config error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.validate_config:
        print(f"✓ Risk config is valid: {config_path or 'built-in defaults'}")
        return EXIT_OK

    if args.entry is None or args.sl is None:
        parser.error("--entry and --sl are required")
    if args.sweep_sl is not None and args.sweep_sl < 1:
        parser.error(f"--sweep-sl must be a positive integer, got {args.sweep_sl}")

    try:
        risk_input = parse_risk_input(build_form(args, config))
        result = compute(risk_input)
    except InvalidInputError as e:
        logger.error(f"Invalid input: {e}")
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    check_sizing_invariants(result)

    formatter = FORMATTERS[args.format]()
    print(formatter.format_result(result))

    if args.sweep_sl:
        distance = result.sl_distance_percent
        ladder = stop_loss_ladder(
            risk_input.entry_price,
            distance * 0.25,
            distance * 2,
            steps=args.sweep_sl,
            direction=result.direction,
        )
        table = sweep_stop_losses(risk_input, ladder)
        print()
        print(table[SWEEP_COLUMNS].to_string(index=False, float_format=lambda v: f"{v:,.4f}"))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
