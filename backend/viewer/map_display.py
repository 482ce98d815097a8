"""
Headless model of the place map: viewport, clustered markers, selection and
popup.

The display runs an explicit state machine:

    IDLE --viewport settles--> FETCHING --results--> UPDATED
    UPDATED/IDLE --click on cluster--> SELECTED --close--> IDLE

Every fetch is stamped with a sequence number. Only the response for the
most recently issued fetch is applied, so a slow response for an old
viewport can never overwrite the markers of the current one.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from viewer.api_client import MapPlace, get_places
from viewer.cluster import Cluster, ClusterSource, Coordinate, Feature
from viewer.popup import Popup
from viewer.style import CLUSTER_MARKER_RADIUS, Style, StyleCache

logger = logging.getLogger(__name__)

DEFAULT_CENTER: Coordinate = (114.160147, 22.35201)  # (lng, lat)
DEFAULT_ZOOM = 11
FALLBACK_RADIUS_KM = 10.0
CLUSTER_DISTANCE_PX = 10
# EPSG:4326 extent width over a 256px tile
MAX_RESOLUTION = 360.0 / 256

FetchPlaces = Callable[[float, float, float], List[MapPlace]]


class MapState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    UPDATED = "updated"
    SELECTED = "selected"


@dataclass
class View:
    center: Coordinate = DEFAULT_CENTER
    zoom: float = DEFAULT_ZOOM
    projection: str = "EPSG:4326"

    @property
    def resolution(self) -> float:
        """Map units (degrees) per pixel."""
        return MAX_RESOLUTION / (2 ** self.zoom)


class Overlay:
    """Popup anchor. A position of None hides the popup."""

    def __init__(self) -> None:
        self.position: Optional[Coordinate] = None

    def set_position(self, position: Optional[Coordinate]) -> None:
        self.position = position

    @property
    def visible(self) -> bool:
        return self.position is not None


@dataclass(frozen=True)
class FetchTicket:
    sequence: int
    lat: float
    lng: float
    radius_km: float


def place_to_feature(place: MapPlace) -> Feature:
    return Feature(
        coordinate=(place.location.lng, place.location.lat),
        properties={"id": place.id, "name": place.name.get("zh_hk")},
    )


class MapDisplay:
    def __init__(
        self,
        fetch_places: FetchPlaces = get_places,
        view: Optional[View] = None,
        style_cache: Optional[StyleCache] = None,
    ):
        self.fetch_places = fetch_places
        self.view = view or View()
        self.source = ClusterSource(distance=CLUSTER_DISTANCE_PX)
        self.style_cache = style_cache or StyleCache()
        self.overlay = Overlay()
        self.state = MapState.IDLE
        self.selection: Optional[Cluster] = None
        self.selected_features: List[Feature] = []
        self._sequence = 0

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def move_to(self, center: Coordinate, zoom: Optional[float] = None) -> bool:
        """Pan/zoom the view; the move settles immediately."""
        self.view.center = center
        if zoom is not None:
            self.view.zoom = zoom
        return self.on_move_end()

    def on_move_end(self) -> bool:
        ticket = self.begin_fetch()
        places = self.fetch_places(ticket.lat, ticket.lng, ticket.radius_km)
        return self.apply_results(ticket, places)

    def begin_fetch(self) -> FetchTicket:
        """Viewport settled: drop the popup and issue a new fetch."""
        self.clear_popup()
        self._sequence += 1
        self.state = MapState.FETCHING
        lng, lat = self.view.center
        return FetchTicket(sequence=self._sequence, lat=lat, lng=lng, radius_km=FALLBACK_RADIUS_KM)

    def apply_results(self, ticket: FetchTicket, places: Sequence[MapPlace]) -> bool:
        """Replace all markers with `places` unless a newer fetch was issued."""
        if ticket.sequence != self._sequence:
            logger.debug(
                "discarding stale results: seq=%d latest=%d", ticket.sequence, self._sequence
            )
            return False
        # A popup opened on the previous markers no longer points at anything
        self.clear_popup()
        self.selection = None
        self.selected_features = []
        self.source.clear()
        self.source.add_features(place_to_feature(p) for p in places)
        self.state = MapState.UPDATED
        logger.debug("markers replaced: seq=%d count=%d", ticket.sequence, len(places))
        return True

    # ------------------------------------------------------------------
    # Markers
    # ------------------------------------------------------------------

    def clusters(self) -> List[Cluster]:
        return self.source.get_clusters(self.view.resolution)

    def style_for(self, cluster: Cluster) -> Style:
        return self.style_cache.get(cluster.size)

    # ------------------------------------------------------------------
    # Selection and popup
    # ------------------------------------------------------------------

    def on_click(self, coordinate: Coordinate) -> Optional[Cluster]:
        """Select the topmost cluster under the click, or clear the popup."""
        hit = self.source.cluster_at(coordinate, self.view.resolution, CLUSTER_MARKER_RADIUS)
        self.selection = hit
        if hit is not None and hit.features:
            self.show_popup(hit.coordinate, hit.features)
            self.state = MapState.SELECTED
            return hit

        self.clear_popup()
        if self.state == MapState.SELECTED:
            self.state = MapState.IDLE
        return None

    def on_popup_close(self) -> None:
        """Close button: hide the popup. The selection is left untouched."""
        self.clear_popup()
        self.state = MapState.IDLE

    def show_popup(self, coordinate: Coordinate, features: Sequence[Feature]) -> None:
        self.selected_features = list(features)
        self.overlay.set_position(coordinate)

    def clear_popup(self) -> None:
        self.overlay.set_position(None)

    def render_popup(self) -> str:
        if not self.overlay.visible:
            return ""
        return Popup(self.selected_features).render()
