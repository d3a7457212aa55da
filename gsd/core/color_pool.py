"""Palette allocation for backlog list colors.

Colors are unique among one user's backlog lists. The used-color table lives
in memory only and is rebuilt from the database at startup by
:func:`scan_used_colors`.
"""
import logging
import threading
from typing import Dict, List, Optional, Set, Tuple

from gsd.exceptions import CapacityExceeded, Conflict, InvariantViolation
from gsd.models import TaskList

logger = logging.getLogger(__name__)

COLOR_PALETTE: Tuple[str, ...] = (
    "#3B82F6",
    "#EF4444",
    "#10B981",
    "#F59E0B",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
    "#84CC16",
    "#F97316",
    "#6366F1",
    "#14B8A6",
    "#DC2626",
    "#059669",
    "#7C3AED",
    "#BE185D",
)

DEFAULT_TASK_COLOR = COLOR_PALETTE[0]


def normalize_color(color: str) -> str:
    """Return the palette spelling of ``color`` or raise if it is not in the palette."""
    candidate = (color or "").strip().upper()
    if candidate not in COLOR_PALETTE:
        raise InvariantViolation(
            f"Invalid color: {color}. Must be one of the predefined palette colors."
        )
    return candidate


class ColorPool:
    def __init__(self, palette: Tuple[str, ...] = COLOR_PALETTE):
        self._palette = palette
        self._used: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    @property
    def palette(self) -> Tuple[str, ...]:
        return self._palette

    def allocate(self, user_id: str) -> str:
        """Reserve and return the first free palette color for ``user_id``."""
        with self._lock:
            used = self._used.setdefault(user_id, set())
            for color in self._palette:
                if color not in used:
                    used.add(color)
                    return color
        raise CapacityExceeded("No colors available in pool")

    def mark_used(self, user_id: str, color: str) -> None:
        color = normalize_color(color)
        with self._lock:
            used = self._used.setdefault(user_id, set())
            if color in used:
                raise Conflict(f"Color {color} is already in use")
            used.add(color)

    def release(self, user_id: str, color: Optional[str]) -> None:
        if not color:
            return
        with self._lock:
            self._used.get(user_id, set()).discard(color.upper())

    def available(self, user_id: str) -> List[str]:
        with self._lock:
            used = self._used.get(user_id, set())
            return [color for color in self._palette if color not in used]

    def reset(self) -> None:
        with self._lock:
            self._used.clear()


color_pool = ColorPool()


def get_color_pool() -> ColorPool:
    return color_pool


def scan_used_colors(db, pool: ColorPool) -> int:
    """Mark the colors of every persisted backlog list as used. Returns the count."""
    rows = (
        db.query(TaskList.user_id, TaskList.color)
        .filter(TaskList.is_backlog.is_(True), TaskList.color.isnot(None))
        .all()
    )
    marked = 0
    for user_id, color in rows:
        try:
            pool.mark_used(user_id, color)
            marked += 1
        except (InvariantViolation, Conflict) as exc:
            logger.warning("Skipping color %s of user %s: %s", color, user_id, exc.detail)
    logger.info("Color pool rebuilt with %d used colors", marked)
    return marked
