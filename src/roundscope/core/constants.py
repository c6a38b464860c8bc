"""
RoundScope Match Analytics - Constants

Defines sides, buy types, win methods, severities and the rule constants
used by the derivation engine. Enum values follow the backend's proto JSON
mapping (``BUY_TYPE_ECO``, ``WIN_METHOD_ELIMINATION``) but also accept the
short lowercase form.
"""

from enum import StrEnum


class InvalidMatchDataError(ValueError):
    """Raised when a record violates the match data contract.

    Examples: a round number below 1, a round without a winner label,
    non-finite kill coordinates. Missing *optional* data never raises.
    """


class Side(StrEnum):
    """Tactical side a team plays in a given round."""

    CT = "CT"  # Defenders
    T = "T"  # Attackers

    @classmethod
    def parse(cls, value: "str | Side | None") -> "Side":
        if isinstance(value, Side):
            return value
        if not value:
            raise InvalidMatchDataError("Missing side label")
        label = str(value).strip().upper()
        if label in ("CT", "COUNTERTERRORIST", "COUNTER-TERRORIST", "SIDE_CT"):
            return cls.CT
        if label in ("T", "TERRORIST", "SIDE_T"):
            return cls.T
        raise InvalidMatchDataError(f"Unknown side label: {value!r}")

    @property
    def opposite(self) -> "Side":
        return Side.T if self is Side.CT else Side.CT


class TeamSlot(StrEnum):
    """Logical team identity, independent of the side being played."""

    A = "A"
    B = "B"

    @property
    def other(self) -> "TeamSlot":
        return TeamSlot.B if self is TeamSlot.A else TeamSlot.A


class BuyType(StrEnum):
    """Spending tier of a team for one round."""

    UNSPECIFIED = "unspecified"
    ECO = "eco"
    FORCE = "force"
    FULL = "full"
    PISTOL = "pistol"

    @classmethod
    def parse(cls, value: "str | BuyType | None") -> "BuyType":
        if isinstance(value, BuyType):
            return value
        if not value:
            return cls.UNSPECIFIED
        label = str(value).strip().lower().removeprefix("buy_type_")
        try:
            return cls(label)
        except ValueError:
            raise InvalidMatchDataError(f"Unknown buy type: {value!r}") from None


class WinMethod(StrEnum):
    """How a round was won."""

    UNSPECIFIED = "unspecified"
    ELIMINATION = "elimination"
    BOMB_EXPLODED = "bomb_exploded"
    BOMB_DEFUSED = "bomb_defused"
    TIME_EXPIRED = "time_expired"

    @classmethod
    def parse(cls, value: "str | WinMethod | None") -> "WinMethod":
        if isinstance(value, WinMethod):
            return value
        if not value:
            return cls.UNSPECIFIED
        label = str(value).strip().lower().removeprefix("win_method_")
        try:
            return cls(label)
        except ValueError:
            raise InvalidMatchDataError(f"Unknown win method: {value!r}") from None


class Severity(StrEnum):
    """Display tone of a derived badge."""

    # Buy outcome badges
    UPSET = "upset"  # Eco or force round won
    WIN = "win"
    LOSS = "loss"
    # Match result badges
    OVERTIME = "overtime"
    DRAW = "draw"
    DECISIVE = "decisive"
    COMFORTABLE = "comfortable"
    CLOSE = "close"


class SortKey(StrEnum):
    """Scoreboard columns that can be sorted on."""

    KILLS = "kills"
    DEATHS = "deaths"
    ASSISTS = "assists"
    ADR = "adr"
    KAST = "kast"
    HS_PCT = "hs_pct"
    RATING = "rating"


# Match format (MR12)
HALF_LENGTH = 12
OVERTIME_ROUND_THRESHOLD = 30

# Narrative thresholds
MIN_STREAK_LENGTH = 4
DECISIVE_MARGIN = 8
COMFORTABLE_MARGIN = 4

# Kill map
BOUNDS_PADDING_FRACTION = 0.05
MIN_BOUNDS_PADDING = 1.0
DEFAULT_CANVAS_SIZE = 600
DEFAULT_CANVAS_MARGIN = 20

# Scoreboard
DEFAULT_TEAM_A_LABEL = "CT"
DEFAULT_TEAM_B_LABEL = "T"

# Dashboard
RECENT_MATCHES_LIMIT = 5
