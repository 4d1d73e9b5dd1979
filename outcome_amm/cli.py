"""Command-line interface for operating pools on a local ledger."""

import argparse
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional

from outcome_amm.config import load_parameters, resolve_db_path
from outcome_amm.core.amount import Amount
from outcome_amm.core.errors import AMMError, PoolNotFound
from outcome_amm.engine.pool_engine import PoolEngine
from outcome_amm.engine.queries import PoolQueries
from outcome_amm.ledger.sqlite import SQLiteLedger
from outcome_amm.logging_setup import configure_logging
from outcome_amm.market.retail import RetailTrader
from outcome_amm.market.simulation import run_simulation


def amount_arg(value: str) -> Amount:
    """argparse type for token amounts."""
    try:
        return Amount.from_tokens(Decimal(value))
    except (InvalidOperation, ValueError):
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None


def build_engine(args: argparse.Namespace) -> PoolEngine:
    return PoolEngine(SQLiteLedger(args.db), load_parameters())


def create_command(args: argparse.Namespace) -> int:
    engine = build_engine(args)
    pool = engine.create_pool(args.market, args.options, args.liquidity, args.provider)
    reserves = ", ".join(str(r) for r in pool.option_reserves)
    print(f"Created pool {pool.market} with reserves [{reserves}]")
    return 0


def add_command(args: argparse.Namespace) -> int:
    engine = build_engine(args)
    shares = engine.add_liquidity(args.market, args.provider, args.amount)
    print(f"Minted {shares} shares to {args.provider}")
    return 0


def remove_command(args: argparse.Namespace) -> int:
    engine = build_engine(args)
    withdrawal = engine.remove_liquidity(args.market, args.provider, args.shares)
    released = ", ".join(str(a) for a in withdrawal.amounts)
    print(f"Burned {withdrawal.shares} shares, released [{released}]")
    return 0


def swap_command(args: argparse.Namespace) -> int:
    engine = build_engine(args)
    amount_out = engine.swap(
        args.market, args.from_option, args.to_option, args.amount, args.min_out
    )
    print(f"Received {amount_out} of option {args.to_option}")
    return 0


def quote_command(args: argparse.Namespace) -> int:
    engine = build_engine(args)
    quote = engine.get_quote(
        args.market, args.option, args.amount, args.side == "buy", args.counter
    )
    print(f"Amount in:  {quote.amount_in} (fee {quote.fee})")
    print(f"Amount out: {quote.amount_out} of option {quote.to_option}")
    print(f"Price:      {quote.effective_price:.6f}")
    return 0


def show_command(args: argparse.Namespace) -> int:
    queries = PoolQueries(SQLiteLedger(args.db))
    summaries = [queries.summary(args.market)] if args.market else queries.summaries()
    if not summaries:
        print("No pools registered")
    for summary in summaries:
        print(f"Pool {summary.market} ({summary.num_options} options, "
              f"{summary.n_providers} providers)")
        for index, reserve in enumerate(summary.reserves):
            probability = summary.probabilities[index] if summary.probabilities else Decimal("0")
            print(f"  option {index}: reserve {reserve.normalize():f}  p={probability:.4f}")
        print(f"  liquidity {summary.total_liquidity.normalize():f}  "
              f"volume {summary.total_volume.normalize():f}  "
              f"fees {summary.fee_collected.normalize():f}")
    return 0


def simulate_command(args: argparse.Namespace) -> int:
    engine = build_engine(args)
    pool = engine.ledger.get_pool(args.market)
    if pool is None:
        raise PoolNotFound(args.market)
    trader = RetailTrader(
        n_options=pool.num_options,
        arrival_rate=args.retail_rate,
        mean_size=args.retail_size,
        seed=args.seed,
    )
    result = run_simulation(engine, args.market, trader, args.steps)
    print(f"Executed {result.n_executed} of {result.n_orders} orders over {args.steps} steps")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Multi-outcome AMM - operate prediction-market pools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  outcome-amm create election --options 3 --liquidity 1000 --provider alice
  outcome-amm swap election 0 2 25 --min-out 20
  outcome-amm quote election 0 25 --side buy --counter 2
  outcome-amm show
        """,
    )
    parser.add_argument(
        "--db",
        default=resolve_db_path(),
        help="Path to the SQLite ledger (defaults to AMM_DB_PATH or data/pools.db)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    create_parser = subparsers.add_parser("create", help="Create a pool")
    create_parser.add_argument("market", help="Market identifier")
    create_parser.add_argument("--options", type=int, required=True, help="Number of options")
    create_parser.add_argument("--liquidity", type=amount_arg, required=True, help="Initial liquidity")
    create_parser.add_argument("--provider", required=True, help="Creating provider identity")
    create_parser.set_defaults(func=create_command)

    add_parser = subparsers.add_parser("add", help="Add liquidity to a pool")
    add_parser.add_argument("market", help="Market identifier")
    add_parser.add_argument("amount", type=amount_arg, help="Deposit amount")
    add_parser.add_argument("--provider", required=True, help="Provider identity")
    add_parser.set_defaults(func=add_command)

    remove_parser = subparsers.add_parser("remove", help="Burn LP shares")
    remove_parser.add_argument("market", help="Market identifier")
    remove_parser.add_argument("shares", type=amount_arg, help="Shares to burn")
    remove_parser.add_argument("--provider", required=True, help="Provider identity")
    remove_parser.set_defaults(func=remove_command)

    swap_parser = subparsers.add_parser("swap", help="Swap one option into another")
    swap_parser.add_argument("market", help="Market identifier")
    swap_parser.add_argument("from_option", type=int, help="Option paid in")
    swap_parser.add_argument("to_option", type=int, help="Option received")
    swap_parser.add_argument("amount", type=amount_arg, help="Gross input amount")
    swap_parser.add_argument(
        "--min-out",
        type=amount_arg,
        default=Amount.ZERO,
        help="Minimum acceptable output (default: no bound)",
    )
    swap_parser.set_defaults(func=swap_command)

    quote_parser = subparsers.add_parser("quote", help="Quote a swap without executing it")
    quote_parser.add_argument("market", help="Market identifier")
    quote_parser.add_argument("option", type=int, help="Option index")
    quote_parser.add_argument("amount", type=amount_arg, help="Gross input amount")
    quote_parser.add_argument(
        "--side",
        choices=["buy", "sell"],
        default="buy",
        help="Pool buys (trader pays the option) or sells it (default: buy)",
    )
    quote_parser.add_argument(
        "--counter",
        type=int,
        default=None,
        help="Counter option (required for pools with more than two options)",
    )
    quote_parser.set_defaults(func=quote_command)

    show_parser = subparsers.add_parser("show", help="Show pool state")
    show_parser.add_argument("market", nargs="?", default=None, help="Market identifier")
    show_parser.set_defaults(func=show_command)

    simulate_parser = subparsers.add_parser("simulate", help="Run random retail flow through a pool")
    simulate_parser.add_argument("market", help="Market identifier")
    simulate_parser.add_argument("--steps", type=int, default=100, help="Simulation steps")
    simulate_parser.add_argument("--retail-rate", type=float, default=1.0, help="Orders per step")
    simulate_parser.add_argument("--retail-size", type=float, default=10.0, help="Mean order size")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.set_defaults(func=simulate_command)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging(args.log_level)
    try:
        return args.func(args)
    except AMMError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
