#!/usr/bin/env python3
"""
MPG match simulator CLI

Runs the match engine over a saved match payload (as returned by the league
API) and prints the virtual lineups, line averages and goals.

Usage:
    python simulate_match.py data/matches/mpg_3_12.json
    python simulate_match.py data/matches/mpg_3_12.json --output out/mpg_3_12.json
    python simulate_match.py data/matches/mpg_3_12.json --verbose
    python simulate_match.py data/matches/mpg_3_12.json -v --log-file logs/mpg_3_12.log
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from mpg import MatchPayloadError, Team, load_match, match_to_dict, validate_match
from mpg.logging_config import setup_logging
from mpg.utils import save_json


def print_team(team: Team, side: str) -> None:
    """Print one team's virtual lineup."""
    print(f'\n{"=" * 60}')
    print(f'{side}: {team.name or team.abbreviation or "?"} ({team.composition})')
    print('=' * 60)

    for starter in team.starters:
        sub = starter.virtual_substitute
        marks = ''
        if starter.goals.scored:
            marks += ' ⚽' * starter.goals.scored
        if starter.goals.mpg_awarded:
            marks += ' (MPG)'
        print(
            f'  {starter.origin_number:>2} {starter.position.name[0]} '
            f'{starter.name or starter.player_id}: {starter.virtual_total:.1f}{marks}'
        )
        if sub is not None:
            sub_marks = ' (MPG)' if sub.goals.mpg_awarded else ''
            print(f'       ↳ {sub.name or sub.player_id}: {sub.virtual_total:.1f}{sub_marks}')

    lines = ', '.join(f'{pos.name.lower()} {score:.2f}' for pos, score in team.line_scores.items())
    print(f'\n  Lines: {lines}')


def main():
    parser = argparse.ArgumentParser(description="Run the MPG match engine on a saved payload")
    parser.add_argument(
        "payload",
        help="Path to a match payload JSON file",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the resolved match summary as JSON to this path",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every substitution and MPG goal decision",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write the log to this file",
    )

    args = parser.parse_args()

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    payload_path = Path(args.payload)
    if not payload_path.exists():
        print(f"❌ Payload file not found: {payload_path}")
        sys.exit(1)

    try:
        match = load_match(payload_path)
    except (MatchPayloadError, json.JSONDecodeError) as e:
        print(f"❌ {e}")
        sys.exit(1)

    header = f"Match {match.match_id}" if match.match_id else "Match"
    if match.match_day:
        header += f" (day {match.match_day})"
    if match.live:
        header += " [LIVE]"
    print(header)

    print_team(match.home, "HOME")
    print_team(match.away, "AWAY")

    print("\n" + "=" * 60)
    if match.live:
        print(f"LIVE SCORE: {match.home.score} - {match.away.score}")
    else:
        print(f"GOAL EVENTS: {len(match.home.goals)} - {len(match.away.goals)}")

    for error in validate_match(match):
        print(f"⚠️  {error}")

    if args.output:
        save_json(args.output, match_to_dict(match))
        print(f"Summary saved to {args.output}")


if __name__ == "__main__":
    main()
