#!/usr/bin/env python3
"""
Generate a season fixture and export it to TSV.

Usage:
    python scripts/generate_season.py
    python scripts/generate_season.py --seed 7 --rounds 22 --blockbusters
    python scripts/generate_season.py --settings settings.json --club collingwood
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from season_scheduler import (
    GeneratorOptions,
    SchedulerSettings,
    SeasonStructure,
    ValidationReport,
    calculate_metrics,
    configure_logging,
    export_meetings_table,
    export_season_tsv,
    generate_season,
    load_clubs,
    load_settings,
)
from season_scheduler.config import DEFAULT_BLOCKBUSTERS

SCRIPT_DIR = Path(__file__).parent
CLUBS_FILE = SCRIPT_DIR / "afl_clubs.json"


def main():
    parser = argparse.ArgumentParser(description="Season fixture generator")
    parser.add_argument("--clubs", type=Path, default=CLUBS_FILE, help="Clubs JSON file")
    parser.add_argument("--settings", type=Path, default=None, help="Settings JSON file")
    parser.add_argument("--seed", type=int, default=1, help="Base random seed")
    parser.add_argument("--rounds", type=int, default=None, help="Regular season rounds")
    parser.add_argument("--club", default=None, help="Requesting club id")
    parser.add_argument(
        "--blockbusters",
        action="store_true",
        help="Place the default blockbusters (ignored with --settings)",
    )
    parser.add_argument("--output", type=Path, default=SCRIPT_DIR, help="Output directory")
    parser.add_argument("--log-level", default=None, help="Logging level")
    args = parser.parse_args()

    configure_logging(args.log_level)

    clubs = load_clubs(args.clubs.read_text())
    if args.settings is not None:
        settings = load_settings(args.settings.read_text())
    else:
        settings = SchedulerSettings(
            blockbusters=DEFAULT_BLOCKBUSTERS if args.blockbusters else (),
        )
    if args.rounds is not None:
        structure = settings.season_structure
        settings.season_structure = SeasonStructure(
            regular_season_rounds=args.rounds,
            bye_rounds=structure.bye_rounds,
            bye_round_count=structure.bye_round_count,
        )

    if args.club is not None and args.club not in clubs:
        parser.error(f"--club {args.club} is not one of the clubs")

    print(f"Generating season: {len(clubs)} clubs, "
          f"{settings.season_structure.regular_season_rounds} rounds, seed {args.seed}...")
    print("=" * 50)

    result = generate_season(GeneratorOptions(
        clubs=clubs, seed=args.seed, requesting_club_id=args.club, settings=settings,
    ))
    season = result.season

    print(f"\nRounds: {len(season.rounds)}")
    print(f"Attempts: {len(result.attempts)}")

    report = ValidationReport(violations=result.violations)
    print(f"\n{report}")

    metrics = calculate_metrics(season, list(clubs))
    print(f"\n{metrics}")

    args.output.mkdir(parents=True, exist_ok=True)
    fixture_file = args.output / f"season_{season.year}_seed_{args.seed}.tsv"
    meetings_file = args.output / f"meetings_{season.year}_seed_{args.seed}.tsv"
    export_season_tsv(season, str(fixture_file), clubs)
    export_meetings_table(season, list(clubs), str(meetings_file))
    print(f"\n✓ Fixture exported to: {fixture_file}")
    print(f"✓ Meetings table exported to: {meetings_file}")

    if not report.passed:
        print("\n⚠️  Season has validation issues!")
        sys.exit(1)


if __name__ == "__main__":
    main()
