"""
Scheduler configuration.

Season structure, match slots, blockbusters and finals settings, with
defaults matching a standard 18-club season. A few process-level settings
can be overridden from environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum

from .models import BlockbusterSpec, Club, FinalsFormat, MatchSlot


def _get_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


# =============================================================================
# PROCESS SETTINGS
# =============================================================================
LOG_LEVEL = _get_str('SEASON_SCHEDULER_LOG_LEVEL', 'WARNING')
DEFAULT_SEASON_YEAR = _get_int('SEASON_SCHEDULER_YEAR', 2026)

# =============================================================================
# GENERATION
# =============================================================================
# One initial attempt plus two reseeded retries
MAX_GENERATION_ATTEMPTS = 3

# =============================================================================
# MATCH SLOTS
# =============================================================================
DEFAULT_MATCH_SLOTS: tuple[MatchSlot, ...] = (
    MatchSlot("thu-night", "Thursday", "7:20pm"),
    MatchSlot("fri-night", "Friday", "7:50pm"),
    MatchSlot("sat-early", "Saturday-Early", "1:45pm"),
    MatchSlot("sat-twilight", "Saturday-Twilight", "4:35pm"),
    MatchSlot("sat-night", "Saturday-Night", "7:25pm"),
    MatchSlot("sun-early", "Sunday-Early", "1:10pm"),
    MatchSlot("sun-twilight-1", "Sunday-Twilight", "3:20pm"),
    MatchSlot("sun-twilight-2", "Sunday-Twilight", "4:40pm"),
    MatchSlot("mon-arvo", "Monday", "3:20pm"),
)

# =============================================================================
# FINALS
# =============================================================================
GF_VENUES: tuple[str, ...] = (
    "MCG",
    "Optus Stadium",
    "Adelaide Oval",
    "Gabba",
    "Marvel Stadium",
    "SCG",
)

# =============================================================================
# BLOCKBUSTERS
# =============================================================================
# Target round for blockbusters whose target_round is auto
BLOCKBUSTER_AUTO_ROUNDS: dict[str, int] = {
    "r1-opener": 1,
    "easter-thursday": 5,
    "good-friday": 5,
    "easter-monday": 5,
    "anzac-day-eve": 7,
    "anzac-day": 7,
    "dreamtime": 11,
    "kings-birthday-eve": 13,
    "kings-birthday": 13,
    # Derbies: first meeting early, return meeting late
    "western-derby-1": 3,
    "western-derby-2": 20,
    "qclash-1": 8,
    "qclash-2": 17,
    "sydney-derby-1": 6,
    "sydney-derby-2": 19,
    "showdown-1": 8,
    "showdown-2": 20,
}

DEFAULT_BLOCKBUSTERS: tuple[BlockbusterSpec, ...] = (
    BlockbusterSpec("r1-opener", "Round 1 Opener", "carlton", "richmond",
                    "MCG", "Thursday", "7:20pm", target_round=1),
    BlockbusterSpec("easter-thursday", "Easter Thursday", "brisbane", "collingwood",
                    "Gabba", "Thursday", "7:20pm"),
    BlockbusterSpec("good-friday", "Good Friday", "northmelbourne", "carlton",
                    "Marvel Stadium", "Friday", "3:20pm"),
    BlockbusterSpec("easter-monday", "Easter Monday", "hawthorn", "geelong",
                    "MCG", "Monday", "3:20pm"),
    BlockbusterSpec("anzac-day-eve", "ANZAC Day Eve", "richmond", "melbourne",
                    "MCG", "Friday", "7:50pm"),
    BlockbusterSpec("anzac-day", "ANZAC Day", "essendon", "collingwood",
                    "MCG", "Saturday-Twilight", "2:20pm"),
    BlockbusterSpec("dreamtime", "Dreamtime at the G", "richmond", "essendon",
                    "MCG", "Friday", "7:50pm"),
    BlockbusterSpec("kings-birthday-eve", "King's Birthday Eve", "essendon", "carlton",
                    "MCG", "Saturday-Night", "7:25pm"),
    BlockbusterSpec("kings-birthday", "King's Birthday (Big Freeze)", "collingwood", "melbourne",
                    "MCG", "Monday", "3:20pm"),
    BlockbusterSpec("western-derby-1", "Western Derby", "westcoast", "fremantle",
                    "Optus Stadium", "Saturday-Night", "5:40pm", kind="derby"),
    BlockbusterSpec("western-derby-2", "Western Derby", "fremantle", "westcoast",
                    "Optus Stadium", "Saturday-Night", "5:40pm", kind="derby"),
    BlockbusterSpec("qclash-1", "QClash", "brisbane", "goldcoast",
                    "Gabba", "Saturday-Twilight", "4:35pm", kind="derby"),
    BlockbusterSpec("qclash-2", "QClash", "goldcoast", "brisbane",
                    "People First Stadium", "Saturday-Twilight", "4:35pm", kind="derby"),
    BlockbusterSpec("sydney-derby-1", "Sydney Derby", "sydney", "gws",
                    "SCG", "Saturday-Twilight", "4:35pm", kind="derby"),
    BlockbusterSpec("sydney-derby-2", "Sydney Derby", "gws", "sydney",
                    "ENGIE Stadium", "Saturday-Twilight", "4:35pm", kind="derby"),
    BlockbusterSpec("showdown-1", "Showdown", "adelaide", "portadelaide",
                    "Adelaide Oval", "Saturday-Night", "4:10pm", kind="derby"),
    BlockbusterSpec("showdown-2", "Showdown", "portadelaide", "adelaide",
                    "Adelaide Oval", "Saturday-Night", "4:10pm", kind="derby"),
)


class GrandFinalVenueMode(Enum):
    """How the grand final venue is chosen."""
    FIXED = "fixed"
    ROTATION = "rotation"
    HIGHER_RANKED = "higher_ranked"


@dataclass
class SeasonStructure:
    regular_season_rounds: int = 23
    bye_rounds: bool = True
    bye_round_count: int = 3


@dataclass
class LadderPoints:
    win: int = 4
    draw: int = 2
    loss: int = 0


@dataclass
class FinalsSettings:
    # "custom" selects custom_format
    format_id: str = "afl-top-8"
    grand_final_venue_mode: GrandFinalVenueMode = GrandFinalVenueMode.FIXED
    grand_final_venue: str = "MCG"
    venue_pool: tuple[str, ...] = GF_VENUES
    custom_format: FinalsFormat | None = None


@dataclass
class SchedulerSettings:
    """Everything that shapes a season besides the clubs and the seed."""
    season_structure: SeasonStructure = field(default_factory=SeasonStructure)
    match_slots: tuple[MatchSlot, ...] = DEFAULT_MATCH_SLOTS
    blockbusters: tuple[BlockbusterSpec, ...] = ()
    blockbuster_placement: bool = True
    # Give large-tier clubs more prime-time slots
    prime_time_bias: bool = False
    finals: FinalsSettings = field(default_factory=FinalsSettings)
    ladder_points: LadderPoints = field(default_factory=LadderPoints)
    year: int = DEFAULT_SEASON_YEAR

    @property
    def enabled_slots(self) -> list[MatchSlot]:
        return [slot for slot in self.match_slots if slot.enabled]


@dataclass
class GeneratorOptions:
    """
    A request to generate one season.

    Args:
        clubs: Club records keyed by club id; key order is the league order
        seed: Base seed; attempt N uses seed + N
        requesting_club_id: The human-controlled club, which gets the
            preferred time slot each round
        settings: Season settings; defaults apply when omitted
    """
    clubs: dict[str, Club]
    seed: int
    requesting_club_id: str | None = None
    settings: SchedulerSettings | None = None

    def resolved_settings(self) -> SchedulerSettings:
        return self.settings if self.settings is not None else SchedulerSettings()


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for command-line use. Library code never calls this."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
