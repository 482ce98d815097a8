"""
Point features and a pixel-distance clustering source for the map viewer.

Coordinates are (x, y) in the view projection; for EPSG:4326 that is
(lng, lat).
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from services.geo import compute_centroid

Coordinate = Tuple[float, float]


@dataclass(eq=False)
class Feature:
    """A single map feature: a point plus arbitrary properties."""
    coordinate: Coordinate
    properties: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)


@dataclass(eq=False)
class Cluster:
    """A marker standing for one or more features."""
    coordinate: Coordinate
    features: List[Feature] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.features)


class ClusterSource:
    """
    Holds the raw features and groups them into clusters for a resolution.

    Features closer than `distance` pixels (along either axis) to the first
    unclustered feature of a group join that group. Clusters are recomputed
    lazily when the features or the resolution change.
    """

    def __init__(self, distance: float = 10):
        self.distance = distance
        self._features: List[Feature] = []
        self._clusters: List[Cluster] = []
        self._resolution: Optional[float] = None
        self.revision = 0

    def get_features(self) -> List[Feature]:
        return list(self._features)

    def clear(self) -> None:
        self._features = []
        self._changed()

    def add_features(self, features: Iterable[Feature]) -> None:
        self._features.extend(features)
        self._changed()

    def _changed(self) -> None:
        self.revision += 1
        self._resolution = None
        self._clusters = []

    def get_clusters(self, resolution: float) -> List[Cluster]:
        if self._resolution != resolution:
            self._clusters = self._cluster(resolution)
            self._resolution = resolution
        return self._clusters

    def _cluster(self, resolution: float) -> List[Cluster]:
        map_distance = self.distance * resolution
        clustered: Set[Feature] = set()
        clusters: List[Cluster] = []
        for feature in self._features:
            if feature in clustered:
                continue
            x, y = feature.coordinate
            members = []
            for candidate in self._features:
                if candidate in clustered:
                    continue
                cx, cy = candidate.coordinate
                if abs(cx - x) <= map_distance and abs(cy - y) <= map_distance:
                    members.append(candidate)
                    clustered.add(candidate)
            centroid = compute_centroid(m.coordinate for m in members)
            clusters.append(Cluster(coordinate=centroid, features=members))
        return clusters

    def cluster_at(
        self, coordinate: Coordinate, resolution: float, hit_tolerance_px: float
    ) -> Optional[Cluster]:
        """Topmost cluster whose marker covers `coordinate`, if any."""
        x, y = coordinate
        # Later clusters are drawn on top
        for cluster in reversed(self.get_clusters(resolution)):
            cx, cy = cluster.coordinate
            if math.hypot(cx - x, cy - y) / resolution <= hit_tolerance_px:
                return cluster
        return None
