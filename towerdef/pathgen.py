"""Random enemy-path generation on the tile grid and tower data loading."""

from __future__ import annotations

import os
import random
from typing import Iterable, Optional

MAP_HEIGHT = 30
MAP_WIDTH = 40

EASY = 1
MEDIUM = 2
HARD = 3
EXPERT = 4

DIFFICULTY_WAYPOINTS: tuple[tuple[int, int], ...] = ((5, 6), (3, 4), (1, 2), (0, 1))
DIFFICULTY_OBSTACLE_PERCS: tuple[int, ...] = (5, 10, 15, 20)

MAX_SHORT_DISTANCES = 10

Tile = tuple[int, int]


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def wrap(n: int, lower: int, upper: int) -> int:
    """Wrap n into the inclusive range [lower, upper]."""
    return lower + (n - lower) % (upper - lower + 1)


def distances_ok(waypoints: list[Tile]) -> bool:
    """False if too many non-consecutive tiles of the path touch each other."""
    too_short = sum(
        1
        for i, (xi, yi) in enumerate(waypoints)
        for j, (xj, yj) in enumerate(waypoints)
        if abs(i - j) > 1 and (xi - xj) ** 2 + (yi - yj) ** 2 == 1
    )
    return too_short <= MAX_SHORT_DISTANCES


def parse_tower_data(lines: Iterable[str]) -> list[dict[str, str]]:
    """Read blank-line separated records of "key value" lines; the first of a repeated key wins."""
    records: list[dict[str, str]] = [{}]
    for raw in lines:
        line = raw.rstrip("\n")
        if not line:
            records.append({})
            continue
        key, sep, value = line.partition(" ")
        if not sep:
            value = line
        records[-1].setdefault(key, value)
    return records


def load_tower_data(path: str | os.PathLike[str]) -> list[dict[str, str]]:
    """Parse a tower data file."""
    with open(path, encoding="utf-8") as handle:
        return parse_tower_data(handle)


def environment_files(names: Iterable[str], environment: int) -> list[str]:
    """The file names that belong to an environment, marked by "<number>-" in the name."""
    marker = f"{environment}-"
    return [name for name in names if marker in name]


class PathGenerator:
    """Builds a path of grid tiles from one map edge to another through random turns."""

    def __init__(self, difficulty: int = EASY, rng: Optional[random.Random] = None) -> None:
        if not 0 <= difficulty < len(DIFFICULTY_WAYPOINTS):
            raise ValueError(f"unsupported path difficulty: {difficulty}")
        self.difficulty = difficulty
        self.rng = rng if rng is not None else random.Random()
        self.waypoints: list[Tile] = []

    def generate(self) -> list[Tile]:
        """Generate paths until one passes the distance check and return its tiles."""
        while True:
            path = self._attempt()
            if distances_ok(path):
                return path

    def _attempt(self) -> list[Tile]:
        rng = self.rng
        num_waypoints = DIFFICULTY_WAYPOINTS[self.difficulty][rng.randint(0, 1)]

        if rng.randint(0, 1) == 0:
            start = (0, rng.randint(1, MAP_HEIGHT - 2))
            inner_start = (1, start[1])
        else:
            start = (rng.randint(1, MAP_WIDTH - 2), 0)
            inner_start = (start[0], 1)

        if rng.randint(0, 1) == 0:
            end = (MAP_WIDTH - 1, rng.randint(1, MAP_HEIGHT - 2))
            inner_end = (MAP_WIDTH - 2, end[1])
        else:
            end = (rng.randint(1, MAP_WIDTH - 2), MAP_HEIGHT - 1)
            inner_end = (end[0], MAP_HEIGHT - 2)

        self.waypoints = [start, inner_start]
        previous = inner_start

        for i in range(num_waypoints):
            last_turn = i == num_waypoints - 1
            new = self.waypoints[-1]
            while (
                new[0] == previous[0]
                or new[1] == previous[1]
                or (last_turn and (new[0] == inner_end[0] or new[1] == inner_end[1]))
            ):
                new = (rng.randint(1, MAP_WIDTH - 2), rng.randint(1, MAP_HEIGHT - 2))
            self.draw_path(self.waypoints[-1], new)
            previous = new

        self.draw_path(self.waypoints[-1], inner_end)
        self.waypoints.append(end)
        return list(self.waypoints)

    def draw_path(self, a: Tile, b: Tile) -> None:
        """Extend the path from a to b with one vertical and one horizontal run."""
        vertical_first = self.rng.randint(0, 1) == 0
        occupied = set(self.waypoints)

        if vertical_first:
            if (a[0], a[1] - _sign(a[1] - b[1])) in occupied:
                vertical_first = False
        elif (a[0] - _sign(a[0] - b[0]), a[1]) in occupied:
            vertical_first = True

        if vertical_first:
            self.draw_line(a, b, 1)
            self.draw_line(self.waypoints[-1], b, 0)
        else:
            self.draw_line(a, b, 0)
            self.draw_line(self.waypoints[-1], b, 1)

    def draw_line(self, a: Tile, b: Tile, direction: int) -> None:
        """Append the tiles from a toward b along one axis (0 horizontal, 1 vertical)."""
        diff = a[direction] - b[direction]
        step = _sign(diff)
        for i in range(1, abs(diff) + 1):
            moved = a[direction] - i * step
            if direction == 0:
                self.waypoints.append((moved, a[1]))
            else:
                self.waypoints.append((a[0], moved))