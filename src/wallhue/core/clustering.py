"""Grouping of quantized color bins into ranked dominant colors."""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import EmptyClusterSet
from ..utils.color import (
    brightness_distance,
    color_hue_distance,
    euclidean_distance,
    rgb_to_hex,
    saturation_distance,
)
from ..utils.logging import get_logger
from .quantizer import ColorBin
from .wall_score import WallScoreEstimator

logger = get_logger(__name__)

DEFAULT_MAX_CLUSTERS = 6
DEFAULT_WALL_THRESHOLD = 0.6


@dataclass
class ColorVariation:
    """One quantized shade belonging to a larger color cluster."""

    rgb: Tuple[int, int, int]
    count: int
    wall_score: float

    def to_dict(self) -> Dict:
        r, g, b = self.rgb
        return {
            "rgb": {"r": r, "g": g, "b": b},
            "count": self.count,
            "wall_score": self.wall_score,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ColorVariation":
        rgb = data["rgb"]
        if isinstance(rgb, dict):
            rgb = (rgb["r"], rgb["g"], rgb["b"])
        return cls(
            rgb=tuple(int(c) for c in rgb),
            count=int(data.get("count", 0)),
            wall_score=float(data.get("wall_score", data.get("wallScore", 0.0))),
        )


@dataclass
class ColorCluster:
    """A dominant color of the image, made of one or more merged bins."""

    hex: str
    rgb: Tuple[int, int, int]
    percentage: float
    wall_score: float
    is_wall: bool
    variations: List[ColorVariation] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to a plain, JSON-serialisable dictionary."""
        data = asdict(self)
        r, g, b = self.rgb
        data["rgb"] = {"r": r, "g": g, "b": b}
        data["variations"] = [v.to_dict() for v in self.variations]
        return data


class GreedyUnionClustering:
    """Greedy single-pass grouping of color bins.

    Bins are visited in insertion order. Each unvisited bin seeds a new
    cluster and every later unvisited bin similar to the seed joins it. The
    first cluster a bin matches keeps it; there is no best-match search, so
    results depend on bin order.

    Two colors are similar when any of these hold:

    * RGB distance below 80
    * RGB distance below 120 and brightness distance below 40
    * RGB distance below 100 and saturation distance below 30
    * RGB distance below 90 and hue distance below 20 degrees
    """

    def is_similar(self, c1: Sequence[float], c2: Sequence[float]) -> bool:
        euclid = euclidean_distance(c1, c2)
        if euclid < 80:
            return True
        if euclid < 120 and brightness_distance(c1, c2) < 40:
            return True
        if euclid < 100 and saturation_distance(c1, c2) < 30:
            return True
        if euclid < 90 and color_hue_distance(c1, c2) < 20:
            return True
        return False

    def group(self, bins: Sequence[ColorBin]) -> List[List[ColorBin]]:
        """Partition bins into groups of similar colors."""
        visited = [False] * len(bins)
        groups = []

        for i, seed in enumerate(bins):
            if visited[i]:
                continue
            visited[i] = True
            group = [seed]

            for j in range(i + 1, len(bins)):
                if not visited[j] and self.is_similar(seed.average, bins[j].average):
                    visited[j] = True
                    group.append(bins[j])

            groups.append(group)

        return groups


class ColorClusterer:
    """Turn quantized bins into ranked, wall-scored dominant colors."""

    def __init__(
        self,
        max_clusters: int = DEFAULT_MAX_CLUSTERS,
        wall_threshold: float = DEFAULT_WALL_THRESHOLD,
        algorithm: Optional[GreedyUnionClustering] = None,
        estimator: Optional[WallScoreEstimator] = None,
    ):
        self.max_clusters = max_clusters
        self.wall_threshold = wall_threshold
        self.algorithm = algorithm or GreedyUnionClustering()
        self.estimator = estimator or WallScoreEstimator()

    def cluster(
        self,
        bins: Iterable[ColorBin],
        width: int,
        height: int,
        total_sampled: Optional[int] = None,
    ) -> List[ColorCluster]:
        """Cluster bins and rank the result.

        Args:
            bins: Color bins in a stable order
            width: Image width, for the wall score position terms
            height: Image height, for the wall score position terms
            total_sampled: Number of sampled pixels; defaults to the sum of
                bin counts

        Returns:
            Clusters with wall colors first, then by descending percentage,
            truncated to ``max_clusters``

        Raises:
            EmptyClusterSet: If there are no bins to cluster
        """
        bins = list(bins)
        if not bins:
            raise EmptyClusterSet("No color bins to cluster")

        if total_sampled is None:
            total_sampled = sum(b.count for b in bins)

        groups = self.algorithm.group(bins)
        clusters = [
            self._build_cluster(group, width, height, total_sampled)
            for group in groups
        ]
        logger.debug(f"Grouped {len(bins)} bins into {len(clusters)} clusters")

        clusters.sort(key=lambda c: (not c.is_wall, -c.percentage))
        return clusters[: self.max_clusters]

    def _build_cluster(
        self,
        group: List[ColorBin],
        width: int,
        height: int,
        total_sampled: int,
    ) -> ColorCluster:
        n = len(group)
        avg_r = sum(b.avg_r for b in group) / n
        avg_g = sum(b.avg_g for b in group) / n
        avg_b = sum(b.avg_b for b in group) / n
        rgb = (int(round(avg_r)), int(round(avg_g)), int(round(avg_b)))

        count = sum(b.count for b in group)
        percentage = count / total_sampled * 100 if total_sampled else 0.0

        members = [p for b in group for p in b.members]
        score = self.estimator.score(members, width, height)

        variations = [
            ColorVariation(
                rgb=tuple(int(round(c)) for c in b.average),
                count=b.count,
                wall_score=self.estimator.score(b.members, width, height),
            )
            for b in group
        ]

        return ColorCluster(
            hex=rgb_to_hex(*rgb),
            rgb=rgb,
            percentage=percentage,
            wall_score=score,
            is_wall=score > self.wall_threshold,
            variations=variations,
        )
