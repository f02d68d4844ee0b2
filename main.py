#!/usr/bin/env python3
"""
Options Strategy Analyzer - Command Line Entry Point

Computes payoff metrics, break-even prices, the P&L curve and the
probability of profit for a single options strategy and prints them as JSON.
"""

import sys
import json
import argparse
from pathlib import Path
from dotenv import load_dotenv

from src.analyzer.strategy_analyzer import StrategyAnalyzer
from src.payoff.models import ValidationError
from src.strategy.strategy_inputs import (
    SINGLE_LEG_STRATEGIES,
    STRATEGY_TYPES,
    SingleLegInput,
    SpreadInput,
)

# Load environment variables from .env file
load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description='Options strategy payoff and probability analyzer'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration file (defaults are used when omitted)'
    )
    parser.add_argument('--strategy', required=True, choices=STRATEGY_TYPES,
                        help='Strategy type to analyze')
    parser.add_argument('--current-price', type=float, required=True,
                        help='Current price of the underlying')
    parser.add_argument('--quantity', type=float, default=1,
                        help='Number of contracts (default: 1)')
    parser.add_argument('--strike', type=float, help='Strike price (single-leg strategies)')
    parser.add_argument('--premium', type=float, help='Premium per share (single-leg strategies)')
    parser.add_argument('--short-strike', type=float, help='Short leg strike (spreads)')
    parser.add_argument('--short-premium', type=float, help='Short leg premium per share (spreads)')
    parser.add_argument('--long-strike', type=float, help='Long leg strike (spreads)')
    parser.add_argument('--long-premium', type=float, help='Long leg premium per share (spreads)')
    parser.add_argument('--iv', type=float, default=None,
                        help='Implied volatility as a decimal (e.g. 0.25)')
    parser.add_argument('--dte', type=float, default=None,
                        help='Calendar days to expiration')
    parser.add_argument('--no-curve', action='store_true',
                        help='Omit the P&L curve from the output')
    parser.add_argument(
        '--version',
        action='version',
        version='Options Strategy Analyzer v1.0.0'
    )
    return parser


def build_leg_inputs(args):
    """Build the leg input variant the selected strategy requires."""
    if args.strategy in SINGLE_LEG_STRATEGIES:
        return SingleLegInput(strike_price=args.strike, premium=args.premium)
    return SpreadInput(
        short_strike=args.short_strike,
        short_premium=args.short_premium,
        long_strike=args.long_strike,
        long_premium=args.long_premium,
    )


def main(argv=None) -> int:
    """Main entry point for the analyzer CLI."""
    args = build_parser().parse_args(argv)

    if args.config and not Path(args.config).exists():
        print(f"Error: Configuration file not found at {args.config}", file=sys.stderr)
        return 1

    analyzer = StrategyAnalyzer(config_path=args.config)
    if not analyzer.initialize():
        print("ERROR: Failed to initialize strategy analyzer", file=sys.stderr)
        return 1

    try:
        result = analyzer.analyze_strategy(
            strategy_type=args.strategy,
            leg_inputs=build_leg_inputs(args),
            quantity=args.quantity,
            current_price=args.current_price,
            implied_volatility=args.iv,
            days_to_expiration=args.dte,
            include_curve=not args.no_curve,
        )
    except ValidationError as e:
        print(f"ERROR: {str(e)}", file=sys.stderr)
        return 2
    finally:
        analyzer.shutdown()

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
