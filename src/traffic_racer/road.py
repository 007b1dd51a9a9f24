"""Road geometry: lanes, margins and the minimum viewport policy."""

from __future__ import annotations

from dataclasses import dataclass

LANE_WIDTH = 80
LANE_COUNT = 5
MIN_VIEWPORT_WIDTH = LANE_WIDTH * LANE_COUNT
MIN_VIEWPORT_HEIGHT = 300


def road_margin(viewport_width: float, lane_width: float = LANE_WIDTH, lanes: int = LANE_COUNT) -> float:
    """Width of the sidewalk on each side of the road, never negative."""
    return max(0.0, (viewport_width - lane_width * lanes) / 2)


@dataclass(slots=True)
class Viewport:
    """Current drawing area and the road laid out inside it."""

    width: int
    height: int

    @classmethod
    def fit(cls, width: int, height: int) -> "Viewport":
        """Build a viewport no smaller than the road itself."""
        return cls(max(int(width), MIN_VIEWPORT_WIDTH), max(int(height), MIN_VIEWPORT_HEIGHT))

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def road_margin(self) -> float:
        return road_margin(self.width)

    def lane_left(self, lane: int) -> float:
        return self.road_margin + lane * LANE_WIDTH

    def lane_center(self, lane: int) -> float:
        """Horizontal center of a lane, counted from the left edge of the road."""
        return self.lane_left(lane) + LANE_WIDTH / 2

    def player_bounds(self, vehicle_width: float) -> tuple[float, float]:
        """Allowed range for a vehicle's left edge so it stays on the road."""
        margin = self.road_margin
        return (margin, self.width - margin - vehicle_width)
