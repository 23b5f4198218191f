import argparse
import json
import logging

from .models import TableConfig
from .simulation import run_simulation


def main() -> None:
    parser = argparse.ArgumentParser(description="Texas Hold'em betting round simulator")
    parser.add_argument("--players", type=int, default=2)
    parser.add_argument("--stack", type=int, default=100)
    parser.add_argument("--min-bet", type=int, default=10)
    parser.add_argument("--community-cap", type=int, default=5)
    parser.add_argument("--reveal-per-street", type=int, default=1)
    parser.add_argument(
        "--match-calls",
        action="store_true",
        help="Make call commit the street's highest bet instead of only recording the decision",
    )
    parser.add_argument("--rounds", type=int, default=50)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = TableConfig(
        min_bet=args.min_bet,
        community_cap=args.community_cap,
        reveal_per_street=args.reveal_per_street,
        match_calls=args.match_calls,
        seed=args.seed,
    )
    summary = run_simulation([args.stack] * args.players, config, rounds=args.rounds, seed=args.seed)
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
