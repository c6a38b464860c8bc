"""
Kill Map Projection and Filtering

Projects kill positions onto a square display canvas without radar
metadata: the world bounds are taken from the kills themselves.

- compute_bounds: padded bounding box over attacker and victim positions
- normalize / project_kills: world units -> canvas pixels
- filter_kills: compound round / player / weapon filter

Each axis is scaled independently, so the map's aspect ratio is not
preserved.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from roundscope.core.constants import (
    BOUNDS_PADDING_FRACTION,
    DEFAULT_CANVAS_MARGIN,
    MIN_BOUNDS_PADDING,
    InvalidMatchDataError,
)
from roundscope.core.schemas import KillEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    """Planar world-space bounding box."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


# Used when there are no kills to measure
UNIT_BOUNDS = Bounds(0.0, 1.0, 0.0, 1.0)


@dataclass(frozen=True)
class KillFilter:
    """Active kill map filters. None means the filter is unset."""

    round_number: int | None = None
    player_id: str | None = None
    weapon: str | None = None

    def matches(self, kill: KillEvent) -> bool:
        if self.round_number is not None and kill.round_number != self.round_number:
            return False
        if self.player_id is not None and self.player_id not in (kill.attacker_id, kill.victim_id):
            return False
        if self.weapon is not None and kill.weapon != self.weapon:
            return False
        return True


@dataclass(frozen=True)
class ProjectedKill:
    """A kill with attacker and victim positions in canvas pixels."""

    kill: KillEvent
    attacker_x: float
    attacker_y: float
    victim_x: float
    victim_y: float


def _pad(span: float, padding_fraction: float, min_padding: float) -> float:
    if span == 0:
        return min_padding
    return span * padding_fraction


def compute_bounds(
    kills: Iterable[KillEvent],
    padding_fraction: float = BOUNDS_PADDING_FRACTION,
    min_padding: float = MIN_BOUNDS_PADDING,
) -> Bounds:
    """
    Bounding box over every attacker and victim position, padded per axis.

    Each axis grows by ``padding_fraction`` of its range on both ends, or by
    ``min_padding`` (one unit by default) when the range is zero. With no
    kills the unit box is returned.

    Raises:
        InvalidMatchDataError: a coordinate is NaN or infinite.
    """
    xs: list[float] = []
    ys: list[float] = []
    for k in kills:
        for pos in (k.attacker_pos, k.victim_pos):
            if not (math.isfinite(pos.x) and math.isfinite(pos.y)):
                raise InvalidMatchDataError(
                    f"Non-finite position in round {k.round_number}: ({pos.x}, {pos.y})"
                )
            xs.append(pos.x)
            ys.append(pos.y)

    if not xs:
        return UNIT_BOUNDS

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    pad_x = _pad(max_x - min_x, padding_fraction, min_padding)
    pad_y = _pad(max_y - min_y, padding_fraction, min_padding)
    if max_x == min_x or max_y == min_y:
        logger.debug("Degenerate kill bounds, using minimum padding")

    return Bounds(min_x - pad_x, max_x + pad_x, min_y - pad_y, max_y + pad_y)


def _check_bounds(bounds: Bounds) -> None:
    if not (bounds.width > 0 and bounds.height > 0):
        raise InvalidMatchDataError(f"Bounds must have a positive area: {bounds}")


def normalize(
    x: float,
    y: float,
    bounds: Bounds,
    canvas_size: float,
    margin: float = DEFAULT_CANVAS_MARGIN,
) -> tuple[float, float]:
    """Map a world position onto ``[margin, canvas_size - margin]`` per axis."""
    _check_bounds(bounds)
    drawable = canvas_size - 2 * margin
    nx = (x - bounds.min_x) / bounds.width * drawable + margin
    ny = (y - bounds.min_y) / bounds.height * drawable + margin
    return nx, ny


def project_kills(
    kills: Sequence[KillEvent],
    bounds: Bounds,
    canvas_size: float,
    margin: float = DEFAULT_CANVAS_MARGIN,
) -> list[ProjectedKill]:
    """Project attacker and victim positions of many kills at once."""
    if not kills:
        return []
    _check_bounds(bounds)

    # Columns: attacker x, attacker y, victim x, victim y
    coords = np.array(
        [(k.attacker_pos.x, k.attacker_pos.y, k.victim_pos.x, k.victim_pos.y) for k in kills],
        dtype=float,
    )
    origin = np.array([bounds.min_x, bounds.min_y, bounds.min_x, bounds.min_y])
    span = np.array([bounds.width, bounds.height, bounds.width, bounds.height])
    projected = (coords - origin) / span * (canvas_size - 2 * margin) + margin

    return [
        ProjectedKill(kill, float(ax), float(ay), float(vx), float(vy))
        for kill, (ax, ay, vx, vy) in zip(kills, projected)
    ]


def filter_kills(kills: Iterable[KillEvent], kill_filter: KillFilter | None = None) -> list[KillEvent]:
    """Kills matching every active filter, in input order."""
    if kill_filter is None:
        return list(kills)
    return [k for k in kills if kill_filter.matches(k)]


def distinct_weapons(kills: Iterable[KillEvent]) -> list[str]:
    return sorted({k.weapon for k in kills})


def round_options(total_rounds: int) -> list[int]:
    """Round numbers offered by the kill map round selector."""
    return list(range(1, max(total_rounds, 0) + 1))
