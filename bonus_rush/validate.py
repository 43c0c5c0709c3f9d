"""
Standalone CLI for validating puzzle content before shipping it.

Usage:
    python -m bonus_rush.validate
    python -m bonus_rush.validate path/to/puzzles.yaml --all
"""

import argparse
import sys

from .errors import ContentLoadError
from .puzzle.content import DEFAULT_CONTENT_PATH, load_content
from .verifiers import filter_cascading_errors, verify_content


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Validate Bonus Rush puzzle content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m bonus_rush.validate
  python -m bonus_rush.validate my_puzzles.yaml
  python -m bonus_rush.validate my_puzzles.yaml --all
        """
    )
    parser.add_argument(
        "content",
        nargs="?",
        default=str(DEFAULT_CONTENT_PATH),
        help="Path to the content YAML file (default: bundled puzzles)"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Report every error instead of hiding cascading ones"
    )

    args = parser.parse_args(argv)

    try:
        content = load_content(args.content)
    except ContentLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = verify_content(content)

    if result.warnings:
        print("Warnings:")
        for warning in result.warnings:
            print(f"- {warning}")

    if not result.valid:
        errors = result.errors if args.all else filter_cascading_errors(result.errors)
        print("Bonus Rush validation failed:", file=sys.stderr)
        for error in errors:
            print(f"- [{error.code}] {error}", file=sys.stderr)
        return 1

    print(f"Bonus Rush validation passed ({result.puzzles_checked} puzzles, "
          f"{result.tiers_checked} tiers checked).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
