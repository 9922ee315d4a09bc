"""Color analysis pipeline: sampling, quantization, wall scoring, clustering."""

from .sampler import Pixel, PixelSampler, to_pixel_array
from .quantizer import ColorBin, ColorQuantizer
from .wall_score import WallScoreEstimator, position_wall_score, wall_score
from .clustering import (
    ColorCluster,
    ColorClusterer,
    ColorVariation,
    GreedyUnionClustering,
)
from .palettes import suggest_palettes
from .analyzer import FALLBACK_PALETTE, ColorAnalyzer, fallback_clusters

__all__ = [
    "Pixel",
    "PixelSampler",
    "to_pixel_array",
    "ColorBin",
    "ColorQuantizer",
    "WallScoreEstimator",
    "position_wall_score",
    "wall_score",
    "ColorCluster",
    "ColorClusterer",
    "ColorVariation",
    "GreedyUnionClustering",
    "suggest_palettes",
    "FALLBACK_PALETTE",
    "ColorAnalyzer",
    "fallback_clusters",
]
