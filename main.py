#!/usr/bin/env python3
"""
Minesweeper engine - command line entry point.

Usage:
    python main.py evaluate [--games N] [--difficulty D | --width W --height H --mines M]
    python main.py watch [--delay S] [--seed N]
"""
import argparse
import logging
import time

from agents import RandomAgent
from evaluation import Evaluator
from minesweeper import BoardConfig, DIFFICULTIES, MinesweeperEnv, MinesweeperError


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Board configuration from a preset or explicit sizes."""
    if args.difficulty:
        return DIFFICULTIES[args.difficulty]
    return BoardConfig(width=args.width, height=args.height, num_mines=args.mines)


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate the random baseline."""
    config = build_config(args)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    agents = {
        "Random": RandomAgent(config.height, config.width, seed=args.seed),
        "Random (flagging)": RandomAgent(
            config.height, config.width, seed=args.seed, flag_probability=0.2
        ),
    }
    results = evaluator.compare(agents)

    print("\n" + "=" * 60)
    print(f"Results on {config.width}x{config.height} with {config.num_mines} mines")
    print("=" * 60)
    print(f"{'Agent':<20} {'Win Rate':<10} {'Loss Rate':<10} {'Avg Steps':<10} {'Avg Revealed':<12}")
    print("-" * 60)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>8.1%} "
            f"{metrics['loss_rate']:>9.1%} "
            f"{metrics['avg_steps']:>10.1f} "
            f"{metrics['avg_revealed']:>12.1f}"
        )


def watch(args: argparse.Namespace) -> None:
    """Play one game with the random agent and print every board."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    agent = RandomAgent(config.height, config.width, seed=args.seed)

    obs, info = env.reset(seed=args.seed)
    print(env.render())

    done = False
    step = 0
    while not done:
        action = agent.select_action(obs, env.get_action_mask())
        flag, x, y = agent.action_to_position(action)
        obs, reward, terminated, truncated, info = env.step(action)
        done = terminated or truncated
        step += 1

        verb = "Flag" if flag else "Reveal"
        print(f"\n=== Step {step} | {verb} ({x}, {y}) | reward {reward:+.1f} ===")
        print(f"Mines remaining: {info['mines_remaining']}")
        print(env.render())
        time.sleep(args.delay)

    print(f"\n*** {info['game_state']} after {step} steps ***")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--difficulty", choices=sorted(DIFFICULTIES), default=None,
        help="Preset board (overrides --width/--height/--mines)",
    )
    parser.add_argument("--width", type=int, default=9, help="Board width")
    parser.add_argument("--height", type=int, default=9, help="Board height")
    parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper engine - evaluate and watch agents"
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate agents")
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )

    watch_parser = subparsers.add_parser("watch", help="Watch one game")
    add_board_arguments(watch_parser)
    watch_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.command == "evaluate":
            evaluate(args)
        elif args.command == "watch":
            watch(args)
        else:
            parser.print_help()
    except MinesweeperError as error:
        # Board options are checked when the board is built or first filled
        parser.error(str(error))


if __name__ == "__main__":
    main()
