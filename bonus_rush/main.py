"""
Main entry point for playing Bonus Rush from a terminal.

Usage:
    python -m bonus_rush.main ladder
    python -m bonus_rush.main play 1 Bronze --store save.json
    python -m bonus_rush.main inventory --store save.json
    python -m bonus_rush.main reset --store save.json
"""

import argparse
import logging
import sys
from typing import Iterable, TextIO

from .errors import BonusRushError
from .game import GameService, NotFound, PuzzleSession, UnlockState, UnlockStatus, reward_lines
from .puzzle import Rejected, RejectReason, parse_tier
from .utils.grid_visualizer import render_found_words, render_grid
from .utils.logger import configure_logging, get_logger


logger = get_logger(__name__)


STATE_LABELS = {
    UnlockState.UNLOCKED: "open",
    UnlockState.COMING_SOON: "coming soon",
    UnlockState.LOCKED: "locked",
}

EXTENSION_COMMANDS = {
    "!video": ("extend_with_reward_video", "Watched a reward video"),
    "!coins": ("extend_with_coins", "Spent coins on extra time"),
    "!buy": ("extend_with_purchase", "Bought extra time"),
}


def describe_status(status: UnlockStatus) -> str:
    label = STATE_LABELS[status.state]
    if status.state == UnlockState.COMING_SOON:
        return f"{label} (in {status.days_until_unlock} day{'s' if status.days_until_unlock != 1 else ''})"
    if status.reason is not None:
        return f"{label} ({status.reason.value.lower().replace('_', ' ')})"
    return label


def print_ladder(service: GameService) -> None:
    print(f"=== Ladder ({service.today().isoformat()}) ===")
    for entry in service.ladder():
        title = f"{entry.puzzle_id}. {entry.title}" if entry.title else str(entry.puzzle_id)
        stars = "*" * entry.mastery.display_stars or "-"
        mastered = " MASTERED" if entry.mastery.is_mastered else ""
        print(f"{title}: {describe_status(entry.status)}  [{entry.mastery.display_tier.value} {stars}]{mastered}")
        if entry.label:
            print(f"   {entry.label}")
        for tier, status in entry.tiers.items():
            print(f"   {tier.value:<6} {describe_status(status)}")


def print_inventory(service: GameService) -> None:
    inventory = service.inventory()
    print("=== Inventory ===")
    for name, value in inventory.model_dump().items():
        print(f"{name.replace('_', ' ')}: {value}")


def play(session: PuzzleSession, lines: Iterable[str], out: TextIO = sys.stdout) -> int:
    """Feed words to a session until input ends or the run completes."""
    print(render_grid(session.run_grid), file=out)
    print(f"Wheel: {' '.join(session.wheel)}  |  {session.remaining_seconds}s", file=out)

    for line in lines:
        entry = line.strip()
        if not entry:
            continue

        if entry.lower() in EXTENSION_COMMANDS:
            method, label = EXTENSION_COMMANDS[entry.lower()]
            if getattr(session, method)():
                print(f"{label}: {session.remaining_seconds}s left", file=out)
            else:
                print("That option is not available.", file=out)
            continue

        result = session.submit_word(entry)
        classification = result.classification
        if isinstance(classification, Rejected):
            print(f"✗ {classification.message}", file=out)
            if classification.reason == RejectReason.TIME_EXPIRED:
                break
            continue

        if classification.kind == "already_found":
            print(f"Already found {classification.word}", file=out)
            continue

        kind = "crossword" if classification.kind == "crossword_fill" else "bonus"
        print(f"✓ {classification.word} ({kind}) {result.found_count}/{result.total_words} "
              f"{'*' * result.stars}", file=out)
        if classification.kind == "crossword_fill":
            print(render_grid(result.run_grid), file=out)
        if result.is_complete:
            break

    summary = session.finish()
    print(file=out)
    print("=== Run Summary ===", file=out)
    print(f"Puzzle {summary.puzzle_id} {summary.tier.value}: "
          f"{summary.found_count}/{summary.total_words} words, {summary.stars} stars", file=out)
    print(render_found_words(summary.crossword_words, summary.bonus_words), file=out)
    if summary.missing_words:
        print(f"Missed: {', '.join(summary.missing_words)}", file=out)
    if summary.reward.applied:
        print("Reward: " + ", ".join(reward_lines(summary.reward.delta)), file=out)
    print(f"Best: {summary.progress.best_found} words, {summary.progress.best_stars} stars", file=out)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Play Bonus Rush puzzles in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
During play, type one word per line. Extra time:
  !video   watch a reward video (+30s, 3 per run)
  !coins   spend coins (+30s, cost depends on tier)
  !buy     one-time purchase (+60s)
        """
    )
    parser.add_argument(
        "command",
        choices=["ladder", "play", "reset", "inventory"],
        help="What to do"
    )
    parser.add_argument(
        "puzzle",
        nargs="?",
        type=int,
        help="Puzzle id (play only)"
    )
    parser.add_argument(
        "tier",
        nargs="?",
        default="Bronze",
        help="Tier to play: Bronze, Silver or Gold (default: Bronze)"
    )
    parser.add_argument(
        "--content",
        help="Path to puzzle content YAML (default: bundled puzzles)"
    )
    parser.add_argument(
        "--store",
        help="Path to a JSON file for saved progress (default: in memory)"
    )
    parser.add_argument(
        "--settings",
        help="Path to gameplay settings YAML"
    )
    parser.add_argument(
        "--advance-days",
        type=int,
        default=0,
        help="Shift the saved debug calendar offset by this many days"
    )
    parser.add_argument(
        "--demo",
        choices=["on", "off"],
        help="Turn demo mode (every puzzle unlocked) on or off"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        service = GameService.create(
            content_path=args.content,
            store_path=args.store,
            settings_path=args.settings,
        )
    except BonusRushError as e:
        print(f"Error loading game: {e}", file=sys.stderr)
        return 1

    if args.demo:
        service.set_demo_mode(args.demo == "on")
    if args.advance_days:
        offset = service.advance_days(args.advance_days)
        print(f"Calendar offset: {offset:+d} days")

    if args.command == "ladder":
        print_ladder(service)
        return 0

    if args.command == "inventory":
        print_inventory(service)
        return 0

    if args.command == "reset":
        service.reset_all_progress()
        print("Progress reset.")
        print_inventory(service)
        return 0

    # play
    if args.puzzle is None:
        parser.error("play needs a puzzle id")
    tier = parse_tier(args.tier)
    if tier is None:
        parser.error(f"unknown tier: {args.tier}")

    session = service.start_run(args.puzzle, tier)
    if isinstance(session, NotFound):
        print(f"Error: {session.message}", file=sys.stderr)
        return 1
    if isinstance(session, UnlockStatus):
        print(f"Puzzle {args.puzzle} {tier.value} is {describe_status(session)}", file=sys.stderr)
        return 1

    logger.debug("Starting run %s", session.get_state())
    try:
        return play(session, sys.stdin)
    except KeyboardInterrupt:
        print("\nRun interrupted by user")
        session.finish()
        return 130


if __name__ == "__main__":
    sys.exit(main())
