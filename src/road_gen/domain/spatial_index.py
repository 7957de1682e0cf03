# road_gen/domain/spatial_index.py
import math
from collections import defaultdict
from collections.abc import Iterable, Iterator

import numpy as np

from road_gen.domain.entities.geometry import Point

Cell = tuple[int, int]


class SpatialIndex:
    """
    Bucket-grid point index over the unbounded plane.

    Points are stored in insertion order and every cell keeps the ids of its
    points in ascending order. Queries never mutate the index, so the answer to
    nearest() depends only on the inserted sequence; equal distances resolve to
    the earliest insert.
    """

    def __init__(self, points: Iterable[Point] = (), *, cell_size: float = 32.0):
        if not (cell_size > 0 and math.isfinite(cell_size)):
            raise ValueError(f"cell_size must be a positive finite number, got {cell_size}")
        self.cell_size = float(cell_size)
        self._points: list[Point] = []
        self._xy = np.empty((16, 2), dtype=float)
        self._cells: dict[Cell, list[int]] = defaultdict(list)
        self._lo: Cell | None = None  # occupied extent, in cells
        self._hi: Cell | None = None
        for p in points:
            self.insert(p)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __contains__(self, p: object) -> bool:
        if not isinstance(p, Point):
            return False
        return any(self._points[i] == p for i in self._cells.get(self._cell(p.x, p.y), ()))

    # --------------- Helpers -----------------------------

    def _cell(self, x: float, y: float) -> Cell:
        return math.floor(x / self.cell_size), math.floor(y / self.cell_size)

    def _grow(self) -> None:
        grown = np.empty((2 * len(self._xy), 2), dtype=float)
        grown[: len(self._points)] = self._xy[: len(self._points)]
        self._xy = grown

    def _gather(self, cells: Iterable[Cell]) -> np.ndarray:
        ids: list[int] = []
        for c in cells:
            ids.extend(self._cells.get(c, ()))
        return np.asarray(ids, dtype=np.intp)

    def _distances(self, ids: np.ndarray, p: Point) -> np.ndarray:
        return np.hypot(self._xy[ids, 0] - p.x, self._xy[ids, 1] - p.y)

    def _ring(self, cx: int, cy: int, r: int) -> Iterator[Cell]:
        """Occupied-extent cells at Chebyshev distance exactly r from (cx, cy)."""
        (lx, ly), (hx, hy) = self._lo, self._hi
        if r == 0:
            yield cx, cy
            return
        xs = range(max(cx - r, lx), min(cx + r, hx) + 1)
        for y in (cy - r, cy + r):
            if ly <= y <= hy:
                for x in xs:
                    yield x, y
        ys = range(max(cy - r + 1, ly), min(cy + r - 1, hy) + 1)
        for x in (cx - r, cx + r):
            if lx <= x <= hx:
                for y in ys:
                    yield x, y

    # --------------------------------------------------------

    def insert(self, p: Point) -> None:
        i = len(self._points)
        if i == len(self._xy):
            self._grow()
        self._xy[i] = (p.x, p.y)
        self._points.append(p)

        c = self._cell(p.x, p.y)
        self._cells[c].append(i)
        if self._lo is None or self._hi is None:
            self._lo = self._hi = c
        else:
            self._lo = (min(self._lo[0], c[0]), min(self._lo[1], c[1]))
            self._hi = (max(self._hi[0], c[0]), max(self._hi[1], c[1]))

    def has_neighbor_within(self, p: Point, radius: float) -> bool:
        """True if some indexed point lies at distance <= radius from p."""
        if radius < 0 or self._lo is None or self._hi is None:
            return False
        if math.isinf(radius):
            return True
        x0, y0 = self._cell(p.x - radius, p.y - radius)
        x1, y1 = self._cell(p.x + radius, p.y + radius)
        x0, y0 = max(x0, self._lo[0]), max(y0, self._lo[1])
        x1, y1 = min(x1, self._hi[0]), min(y1, self._hi[1])
        if x0 > x1 or y0 > y1:
            return False
        ids = self._gather((cx, cy) for cx in range(x0, x1 + 1) for cy in range(y0, y1 + 1))
        return bool(ids.size) and bool((self._distances(ids, p) <= radius).any())

    def nearest(self, p: Point) -> Point:
        if self._lo is None or self._hi is None:
            raise ValueError("nearest() on an empty index")
        cx, cy = self._cell(p.x, p.y)
        lo, hi = self._lo, self._hi
        # rings closer than the occupied extent are empty
        first = max(0, lo[0] - cx, cx - hi[0], lo[1] - cy, cy - hi[1])
        last = max(abs(cx - lo[0]), abs(cx - hi[0]), abs(cy - lo[1]), abs(cy - hi[1]))

        best_d, best_i = math.inf, -1
        for r in range(first, last + 1):
            ids = self._gather(self._ring(cx, cy, r))
            if ids.size:
                d = self._distances(ids, p)
                k = np.lexsort((ids, d))[0]
                if d[k] < best_d or (d[k] == best_d and ids[k] < best_i):
                    best_d, best_i = float(d[k]), int(ids[k])
            # anything in ring r + 1 or beyond is strictly farther than r cells
            if best_d < r * self.cell_size:
                break
        return self._points[best_i]
