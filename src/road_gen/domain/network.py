# road_gen/domain/network.py
from collections.abc import Iterator
from dataclasses import dataclass

from road_gen.domain.entities.geometry import Road, RoadClass


@dataclass(frozen=True)
class RoadNetwork:
    """Accepted roads in commit order, plus the map bounds. Read-only view for renderers."""

    roads: tuple[Road, ...]
    width: int
    height: int

    def __len__(self) -> int:
        return len(self.roads)

    def __iter__(self) -> Iterator[Road]:
        return iter(self.roads)

    def by_class(self) -> dict[RoadClass, list[Road]]:
        out: dict[RoadClass, list[Road]] = {rc: [] for rc in RoadClass}
        for r in self.roads:
            out[r.road_class].append(r)
        return out

    def records(self) -> Iterator[dict]:
        for r in self.roads:
            yield {
                "from": r.start.as_tuple(),
                "to": r.end.as_tuple(),
                "road_class": r.road_class.value,
            }
