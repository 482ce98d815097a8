"""
Marker styles for clustered place features.
"""
from dataclasses import dataclass
from typing import Dict, Optional

CLUSTER_MARKER_RADIUS = 10
CLUSTER_FILL_COLOR = "#3399CC"
CLUSTER_STROKE_COLOR = "#fff"
CLUSTER_TEXT_COLOR = "#fff"


@dataclass(frozen=True)
class Fill:
    color: str


@dataclass(frozen=True)
class Stroke:
    color: str
    width: float = 1.25


@dataclass(frozen=True)
class CircleStyle:
    radius: float
    fill: Optional[Fill] = None
    stroke: Optional[Stroke] = None


@dataclass(frozen=True)
class Text:
    text: str
    fill: Optional[Fill] = None


@dataclass(frozen=True)
class Style:
    image: Optional[CircleStyle] = None
    text: Optional[Text] = None


def cluster_style(size: int) -> Style:
    """Circle marker labelled with the number of places it stands for."""
    return Style(
        image=CircleStyle(
            radius=CLUSTER_MARKER_RADIUS,
            stroke=Stroke(color=CLUSTER_STROKE_COLOR),
            fill=Fill(color=CLUSTER_FILL_COLOR),
        ),
        text=Text(text=str(size), fill=Fill(color=CLUSTER_TEXT_COLOR)),
    )


class StyleCache:
    """
    One Style per cluster size, built on first use and reused afterwards.

    Never evicted: cluster sizes are small integers.
    """

    def __init__(self) -> None:
        self._styles: Dict[int, Style] = {}

    def get(self, size: int) -> Style:
        style = self._styles.get(size)
        if style is None:
            style = cluster_style(size)
            self._styles[size] = style
        return style

    def __len__(self) -> int:
        return len(self._styles)
