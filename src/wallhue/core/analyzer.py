"""End-to-end dominant color analysis of a room photograph."""

from typing import List, Optional

from ..errors import EmptyClusterSet
from ..providers.seed import ColorSeedProvider, SeedColor, parse_seed_entries
from ..utils.config import Config
from ..utils.logging import PerformanceLogger, get_logger
from .clustering import ColorCluster, ColorClusterer, ColorVariation
from .quantizer import ColorQuantizer
from .sampler import PixelBuffer, PixelSampler

logger = get_logger(__name__)

# Substituted when an image yields no clusters and no seed colors are available.
FALLBACK_PALETTE = [
    {"hex": "#FF5733", "rgb": (255, 87, 51), "percentage": 35.5},
    {"hex": "#33FF57", "rgb": (51, 255, 87), "percentage": 28.2},
    {"hex": "#3357FF", "rgb": (51, 87, 255), "percentage": 20.1},
    {"hex": "#FFFF33", "rgb": (255, 255, 51), "percentage": 16.2},
]


def _cluster_from_seed(seed: SeedColor) -> ColorCluster:
    return ColorCluster(
        hex=seed.hex,
        rgb=seed.rgb,
        percentage=seed.percentage,
        wall_score=0.0,
        is_wall=False,
        variations=[ColorVariation(rgb=seed.rgb, count=0, wall_score=0.0)],
    )


def fallback_clusters() -> List[ColorCluster]:
    """The constant fallback palette as clusters."""
    return [
        _cluster_from_seed(SeedColor(hex=c["hex"], rgb=c["rgb"], percentage=c["percentage"]))
        for c in FALLBACK_PALETTE
    ]


class ColorAnalyzer:
    """Sample, quantize and cluster an image into ranked dominant colors."""

    def __init__(
        self,
        config: Optional[Config] = None,
        seed_provider: Optional[ColorSeedProvider] = None,
    ):
        """Initialize the analyzer.

        Args:
            config: Pipeline settings, defaults to :class:`Config` defaults
            seed_provider: Optional vision collaborator consulted when the
                local analysis finds nothing
        """
        self.config = config or Config()
        self.seed_provider = seed_provider
        self.quantizer = ColorQuantizer(
            bucket_size=self.config.bucket_size,
            biased_average=self.config.biased_average,
        )
        self.clusterer = ColorClusterer(
            max_clusters=self.config.max_clusters,
            wall_threshold=self.config.wall_threshold,
        )
        self.perf = PerformanceLogger()

    def analyze(
        self,
        image: PixelBuffer,
        width: Optional[int] = None,
        height: Optional[int] = None,
        use_fallback: bool = True,
    ) -> List[ColorCluster]:
        """Find the dominant colors of an image.

        Args:
            image: (H, W, 3) array or flat RGB buffer
            width: Image width for flat buffers
            height: Image height for flat buffers
            use_fallback: Substitute seed colors or :data:`FALLBACK_PALETTE`
                when no clusters are found, instead of raising

        Returns:
            Ranked clusters, wall colors first

        Raises:
            BufferSizeMismatch: If the buffer disagrees with the dimensions
            EmptyClusterSet: If nothing was found and ``use_fallback`` is off
        """
        sampler = PixelSampler(image, width, height, stride=self.config.sample_stride)

        self.perf.start_timer("analysis")
        bins = self.quantizer.quantize(sampler)
        total_sampled = sum(b.count for b in bins.values())
        logger.debug(
            f"Sampled {total_sampled} pixels from {sampler.width}x{sampler.height} "
            f"image into {len(bins)} bins"
        )

        try:
            clusters = self.clusterer.cluster(
                bins.values(), sampler.width, sampler.height, total_sampled
            )
        except EmptyClusterSet:
            if not use_fallback:
                raise
            clusters = self._fallback(sampler.pixels)
        finally:
            self.perf.end_timer("analysis")

        return clusters

    def _fallback(self, pixels) -> List[ColorCluster]:
        if self.seed_provider is not None:
            seeds = parse_seed_entries(self.seed_provider.propose_colors(pixels))
            if seeds:
                logger.warning(
                    f"No colors found locally, using {len(seeds)} seed colors"
                )
                seeds = seeds[: self.config.max_clusters]
                return [_cluster_from_seed(seed) for seed in seeds]

        logger.warning("No colors found, using fallback palette")
        return fallback_clusters()
