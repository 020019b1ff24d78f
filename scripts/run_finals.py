#!/usr/bin/env python3
"""
Play through a finals series with random scores.

Generates a season, fills the ladder with random results, then resolves
the chosen finals format one week at a time until a premier is crowned.

Usage:
    python scripts/run_finals.py
    python scripts/run_finals.py --format page-mcintyre-top-4 --seed 3
    python scripts/run_finals.py --format-file my_format.json
    python scripts/run_finals.py --settings settings.json
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from season_scheduler import (
    FINALS_FORMATS,
    GeneratorOptions,
    MatchResult,
    SchedulerSettings,
    Season,
    apply_results,
    configure_logging,
    create_initial_ladder,
    finals_format_for,
    generate_fixture,
    get_finals_format,
    get_premier,
    load_clubs,
    load_finals_format,
    load_settings,
    next_finals_week,
    resolve_finals_week,
)
from season_scheduler.rng import SeededRNG

SCRIPT_DIR = Path(__file__).parent
CLUBS_FILE = SCRIPT_DIR / "afl_clubs.json"


def random_results(season: Season, rng: SeededRNG) -> list[MatchResult]:
    """Random scores for every regular-season fixture."""
    return [
        MatchResult(
            round_number=round_.number,
            match_index=i,
            home_club_id=f.home_club_id,
            away_club_id=f.away_club_id,
            home_score=rng.randint(40, 130),
            away_score=rng.randint(40, 130),
        )
        for round_ in season.rounds
        for i, f in enumerate(round_.fixtures)
    ]


def main():
    parser = argparse.ArgumentParser(description="Finals series runner")
    parser.add_argument("--clubs", type=Path, default=CLUBS_FILE, help="Clubs JSON file")
    parser.add_argument("--settings", type=Path, default=None, help="Settings JSON file")
    parser.add_argument("--format", default=None, choices=sorted(FINALS_FORMATS),
                        help="Preset finals format (overrides settings)")
    parser.add_argument("--format-file", type=Path, default=None, help="Custom format JSON file")
    parser.add_argument("--seed", type=int, default=1, help="Random seed")
    parser.add_argument("--log-level", default=None, help="Logging level")
    args = parser.parse_args()

    configure_logging(args.log_level)

    clubs = load_clubs(args.clubs.read_text())
    if args.settings is not None:
        settings = load_settings(args.settings.read_text())
    else:
        settings = SchedulerSettings()

    if args.format_file is not None:
        finals_format = load_finals_format(args.format_file.read_text())
    elif args.format is not None:
        finals_format = get_finals_format(args.format)
    else:
        finals_format = finals_format_for(settings.finals)

    rng = SeededRNG(args.seed)
    season = generate_fixture(GeneratorOptions(clubs=clubs, seed=args.seed, settings=settings))
    ladder = apply_results(
        create_initial_ladder(list(clubs)), random_results(season, rng), settings.ladder_points,
    )

    print(f"Ladder after {len(season.rounds)} rounds:")
    for position, entry in enumerate(ladder, start=1):
        print(f"  {position:>2}. {clubs[entry.club_id].name:<20} "
              f"{entry.points:>3} pts  {entry.percentage:6.1f}%")

    print(f"\n{finals_format.name}")
    print("=" * 50)

    finals_results: list[MatchResult] = []
    week_number = next_finals_week(season, finals_format)
    while week_number is not None:
        finals_round = resolve_finals_week(
            week_number, ladder, finals_results, finals_format, clubs,
            settings=settings.finals, year=season.year,
        )
        season.add_finals_round(finals_round)

        print(f"\n{finals_round.name}")
        for f in finals_round.fixtures:
            result = MatchResult(
                round_number=week_number,
                match_index=f.match_index,
                home_club_id=f.home_club_id,
                away_club_id=f.away_club_id,
                home_score=rng.randint(40, 130),
                away_score=rng.randint(40, 130),
                is_final=True,
                final_type=f.final_type,
            )
            finals_results.append(result)
            print(f"  {f.label:<4} {clubs[f.home_club_id].name:>20} {result.home_score:>3} "
                  f"v {result.away_score:<3} {clubs[f.away_club_id].name:<20} @ {f.venue}")

        week_number = next_finals_week(season, finals_format)

    premier = get_premier(finals_results)
    print("\n" + "=" * 50)
    print(f"Premier: {clubs[premier].name if premier else 'not yet determined'}")


if __name__ == "__main__":
    main()
