import argparse
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from pokerai.actions import encode_action, format_action
from pokerai.cards import parse_card_sequence
from pokerai.constants import DEFAULT_CHECK_EVERY
from pokerai.engine import EngineConfig, PokerAI
from pokerai.eval import TensorLUTHandEvaluator
from pokerai.logging_utils import set_logging
from pokerai.state_decoder import StateDecodeError

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokerai",
        description="Pick fold/call/bet for one hand by Monte Carlo simulation.",
    )

    state = parser.add_argument_group("game state")
    state.add_argument("--state", type=str, default=None, help="JSON file with the raw game state")
    state.add_argument("--hand", type=str, default=None, help='hole cards, e.g. "AhKd"')
    state.add_argument("--board", type=str, default="", help='community cards, e.g. "Kh8s2c"')
    state.add_argument("--dead", type=str, default="", help="other seen cards that are out of play")
    state.add_argument("--opponents", type=int, default=1)
    state.add_argument("--stack", type=int, default=100)

    engine = parser.add_argument_group("engine")
    engine.add_argument("--threads", type=int, default=4)
    engine.add_argument("--timeout_ms", type=int, default=1000)
    engine.add_argument(
        "--check_every",
        type=int,
        default=DEFAULT_CHECK_EVERY,
        help="games between deadline checks (overshoot vs. clock overhead)",
    )
    engine.add_argument("--seed", type=int, default=None)
    engine.add_argument("--max_games_per_worker", type=int, default=None)
    engine.add_argument("--lut_path", type=str, default=None, help="hand rank table file (built and saved if missing)")
    engine.add_argument("--log_level", type=str, default="INFO")
    return parser


def config_from_args(args: argparse.Namespace) -> EngineConfig:
    return EngineConfig(
        num_threads=args.threads,
        timeout_ms=args.timeout_ms,
        check_every=args.check_every,
        seed=args.seed,
        max_games_per_worker=args.max_games_per_worker,
    )


def raw_state_from_args(args: argparse.Namespace) -> dict[str, Any]:
    if args.state:
        return json.loads(Path(args.state).read_text())
    if not args.hand:
        raise ValueError("Either --state or --hand is required")

    return {
        "hand": parse_card_sequence(args.hand),
        "community": parse_card_sequence(args.board, allow_empty=True),
        "dead": parse_card_sequence(args.dead, allow_empty=True),
        "num_opponents": args.opponents,
        "stack": args.stack,
        "your_turn": True,
    }


def load_evaluator(lut_path: str | None) -> TensorLUTHandEvaluator:
    if lut_path and Path(lut_path).exists():
        logger.info("Loading hand rank table from %s", lut_path)
        return TensorLUTHandEvaluator.from_table_file(lut_path)

    logger.info("Building hand rank table...")
    evaluator = TensorLUTHandEvaluator()
    if lut_path:
        evaluator.save_table(lut_path)
        logger.info("Saved hand rank table to %s", lut_path)
    return evaluator


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    set_logging(args.log_level.upper())

    try:
        cfg = config_from_args(args)
        raw_state = raw_state_from_args(args)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    ai = PokerAI(cfg, load_evaluator(args.lut_path))
    try:
        ai.update_state(raw_state)
    except StateDecodeError as e:
        logger.error("Could not load game state: %s", e)
        return 2

    if not ai.is_my_turn():
        print("Not my turn")
        return 0

    action = ai.compute_decision()
    outcome = ai.last_outcome
    if outcome is not None:
        logger.info("Simulated %d games, win probability %.4f", outcome.games_played, outcome.win_probability)

    print(format_action(action))
    print(encode_action(action))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
