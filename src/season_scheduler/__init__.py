"""Season fixture generator and finals bracket resolver."""

from .config import (
    FinalsSettings,
    GeneratorOptions,
    GrandFinalVenueMode,
    LadderPoints,
    SchedulerSettings,
    SeasonStructure,
    configure_logging,
)
from .exceptions import (
    FinalsError,
    FinalsFormatError,
    InsufficientClubsError,
    LadderError,
    SchedulerError,
)
from .export import (
    export_meetings_table,
    export_season_tsv,
    meetings_table_to_tsv,
    season_to_tsv,
)
from .finals import (
    get_loser,
    get_premier,
    get_winner,
    is_season_complete,
    next_finals_week,
    resolve_finals_week,
)
from .finals_formats import (
    FINALS_FORMATS,
    check_finals_format,
    finals_format_for,
    get_finals_format,
)
from .generator import GenerationResult, generate_fixture, generate_season
from .ladder import apply_results, create_initial_ladder, sort_ladder
from .metrics import ScheduleMetrics, calculate_metrics
from .models import (
    BlockbusterSpec,
    Club,
    FinalsFormat,
    FinalsWeek,
    FinalType,
    Fixture,
    LadderEntry,
    MatchResult,
    MatchSlot,
    Matchup,
    Outcome,
    Round,
    Season,
    TeamSource,
)
from .schemas import load_blockbusters, load_clubs, load_finals_format, load_settings
from .standings import round_robin_standings
from .validator import ValidationReport, Violation, ViolationKind, validate_fixture

__all__ = [
    "Club",
    "MatchSlot",
    "Fixture",
    "Round",
    "Season",
    "LadderEntry",
    "MatchResult",
    "FinalType",
    "Outcome",
    "TeamSource",
    "Matchup",
    "FinalsWeek",
    "FinalsFormat",
    "BlockbusterSpec",
    "SeasonStructure",
    "FinalsSettings",
    "GrandFinalVenueMode",
    "LadderPoints",
    "SchedulerSettings",
    "GeneratorOptions",
    "configure_logging",
    "SchedulerError",
    "InsufficientClubsError",
    "FinalsError",
    "FinalsFormatError",
    "LadderError",
    "generate_season",
    "generate_fixture",
    "GenerationResult",
    "validate_fixture",
    "ValidationReport",
    "Violation",
    "ViolationKind",
    "FINALS_FORMATS",
    "get_finals_format",
    "finals_format_for",
    "check_finals_format",
    "resolve_finals_week",
    "next_finals_week",
    "get_winner",
    "get_loser",
    "is_season_complete",
    "get_premier",
    "round_robin_standings",
    "create_initial_ladder",
    "apply_results",
    "sort_ladder",
    "ScheduleMetrics",
    "calculate_metrics",
    "season_to_tsv",
    "export_season_tsv",
    "meetings_table_to_tsv",
    "export_meetings_table",
    "load_finals_format",
    "load_blockbusters",
    "load_settings",
    "load_clubs",
]
