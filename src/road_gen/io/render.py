# road_gen/io/render.py
from pathlib import Path

from road_gen.domain.entities.geometry import RoadClass
from road_gen.domain.network import RoadNetwork

# (colour, line width) per class
ROAD_STYLES: dict[RoadClass, tuple[tuple[float, float, float], float]] = {
    RoadClass.SMALL: ((0.0, 0.0, 1.0), 1.0),
    RoadClass.MEDIUM: ((0.0, 0.0, 0.0), 3.0),
    RoadClass.LARGE: ((1.0, 0.0, 0.0), 5.0),
}
BACKGROUND = (240 / 255, 240 / 255, 1.0)
VERTEX_COLOUR = (70 / 255, 200 / 255, 150 / 255, 150 / 255)


def render_network(
    network: RoadNetwork,
    path: str | Path,
    *,
    markers: bool = False,
    dpi: int = 100,
) -> Path:
    """
    Draw the network to an image file, one pixel per map unit at the given dpi.
    Coarse classes are drawn last so they sit on top of the fine ones.
    """
    # matplotlib is an optional extra
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.collections import LineCollection
    from matplotlib.patches import Rectangle

    w, h = network.width, network.height
    fig = plt.figure(figsize=(w / dpi, h / dpi), dpi=dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)  # y grows downwards, like the map
    ax.set_axis_off()
    ax.add_patch(Rectangle((0, 0), w, h, facecolor=BACKGROUND, edgecolor="none"))

    by_class = network.by_class()
    for rc in (RoadClass.SMALL, RoadClass.MEDIUM, RoadClass.LARGE):
        roads = by_class[rc]
        if not roads:
            continue
        colour, width = ROAD_STYLES[rc]
        lines = [(r.start.as_tuple(), r.end.as_tuple()) for r in roads]
        ax.add_collection(LineCollection(lines, colors=[colour], linewidths=width))

    if markers and len(network):
        xs = [p.x for r in network for p in r.points()]
        ys = [p.y for r in network for p in r.points()]
        ax.scatter(xs, ys, s=4, color=VERTEX_COLOUR, zorder=3)

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    try:
        fig.savefig(out, dpi=dpi)
    finally:
        plt.close(fig)
    return out
