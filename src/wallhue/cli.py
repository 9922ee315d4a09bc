"""Command-line interface for wallhue."""

import json
import logging
import sys
from pathlib import Path

import click
import rich.traceback
from rich.console import Console
from rich.table import Table

from .core.analyzer import ColorAnalyzer
from .core.palettes import suggest_palettes
from .image.io import load_image, save_image, save_mask
from .image.mask import MaskGenerator
from .image.replacement import ColorReplacementEngine, ReplacementRequest
from .utils.color import euclidean_distance, hex_to_rgb
from .utils.config import ConfigManager
from .utils.logging import setup_logging

console = Console()
rich.traceback.install(console=console)

try:
    from . import __version__
except ImportError:
    __version__ = "unknown"


@click.group()
@click.version_option(__version__, prog_name="wallhue")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress output")
@click.option(
    "--config", type=click.Path(exists=True), help="Path to configuration file"
)
@click.option(
    "--profile",
    type=click.Choice(["fast", "balanced", "precise"]),
    help="Apply a predefined configuration profile",
)
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool, config, profile):
    """wallhue: find wall colors in room photos and repaint them."""
    ctx.ensure_object(dict)

    log_level = logging.INFO
    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    setup_logging(level=log_level)

    config_manager = ConfigManager.from_env(config)
    if profile:
        config_manager.apply_profile(profile)

    valid, errors = config_manager.validate_config()
    if not valid:
        raise click.ClickException("Invalid configuration: " + "; ".join(errors))

    ctx.obj["config_manager"] = config_manager
    ctx.obj["config"] = config_manager.get_config_model()
    ctx.obj["quiet"] = quiet


def _print_clusters(clusters) -> None:
    table = Table(title="Dominant colors")
    table.add_column("#", justify="right")
    table.add_column("Hex")
    table.add_column("Coverage", justify="right")
    table.add_column("Wall score", justify="right")
    table.add_column("Wall")
    table.add_column("Shades", justify="right")

    for index, cluster in enumerate(clusters, start=1):
        table.add_row(
            str(index),
            f"[on {cluster.hex}]    [/] {cluster.hex}",
            f"{cluster.percentage:.1f}%",
            f"{cluster.wall_score:.2f}",
            "yes" if cluster.is_wall else "no",
            str(len(cluster.variations)),
        )

    console.print(table)


@cli.command()
@click.argument("input_image", type=click.Path(exists=True))
@click.option("--top", type=int, help="Number of colors to report")
@click.option("--stride", type=int, help="Sample every Nth pixel")
@click.option("--output", "-o", type=click.Path(), help="Write analysis as JSON")
@click.pass_context
def analyze(ctx, input_image, top, stride, output):
    """Find the dominant colors of a room photo and flag likely walls."""
    logger = logging.getLogger(__name__)
    config = ctx.obj["config"]

    updates = {}
    if top is not None:
        updates["max_clusters"] = top
    if stride is not None:
        updates["sample_stride"] = stride
    if updates:
        config = config.model_copy(update=updates)

    try:
        image = load_image(input_image, max_size=config.max_image_size)
        clusters = ColorAnalyzer(config).analyze(image)

        if not ctx.obj["quiet"]:
            _print_clusters(clusters)

        if output:
            analysis = {
                "image": str(input_image),
                "colors": [c.to_dict() for c in clusters],
                "palettes": suggest_palettes(clusters),
            }
            with open(output, "w") as f:
                json.dump(analysis, f, indent=2)
            click.echo(f"Analysis saved to {output}")

    except Exception as e:
        logger.error(f"Error during color analysis: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("input_image", type=click.Path(exists=True))
@click.option("--target", required=True, help="Wall color to replace (#RRGGBB)")
@click.option("--new", "new_color", required=True, help="Replacement color (#RRGGBB)")
@click.option("--tolerance", type=float, help="Color match tolerance")
@click.option(
    "--blend-mode",
    type=click.Choice(["linear", "natural", "smooth"]),
    help="Blend curve near the tolerance edge",
)
@click.option(
    "--use-variations",
    is_flag=True,
    help="Match all shades of the target's cluster instead of the target alone",
)
@click.option("--workers", type=int, help="Threads for the per-pixel pass")
@click.option("--output", "-o", type=click.Path(), required=True, help="Output image")
@click.pass_context
def replace(ctx, input_image, target, new_color, tolerance, blend_mode, use_variations, workers, output):
    """Replace a wall color while keeping lighting and shadows."""
    logger = logging.getLogger(__name__)
    config = ctx.obj["config"]

    try:
        image = load_image(input_image, max_size=config.max_image_size)

        variations = None
        if use_variations:
            clusters = ColorAnalyzer(config).analyze(image, use_fallback=False)
            variations = _variations_for(clusters, target)
            if variations is None:
                click.echo(f"No detected color close to {target}, matching it directly")

        request = ReplacementRequest(
            target_hex=target,
            new_hex=new_color,
            tolerance=tolerance if tolerance is not None else config.tolerance,
            variations=variations,
        )
        engine = ColorReplacementEngine(
            variation_wall_threshold=config.variation_wall_threshold,
            blend_mode=blend_mode or config.blend_mode,
            workers=workers or config.workers,
        )
        result = engine.replace(image, request)

        save_image(result.image, output)
        click.echo(
            f"Recolored {result.pixels_changed} pixels "
            f"({result.changed_fraction * 100:.1f}%) -> {output}"
        )

    except Exception as e:
        logger.error(f"Error during color replacement: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _variations_for(clusters, target_hex):
    """Variations of the cluster closest to ``target_hex``, if any is close."""
    target = hex_to_rgb(target_hex)
    best = min(
        clusters, key=lambda c: euclidean_distance(c.rgb, target), default=None
    )
    if best is None or euclidean_distance(best.rgb, target) >= 80:
        return None
    return best.variations


@cli.command()
@click.argument("input_image", type=click.Path(exists=True))
@click.option("--target", required=True, help="Wall color to mask (#RRGGBB)")
@click.option("--tolerance", type=float, help="Color match tolerance")
@click.option("--output", "-o", type=click.Path(), required=True, help="Output mask image")
@click.pass_context
def mask(ctx, input_image, target, tolerance, output):
    """Write a binary wall mask for an external inpainting service."""
    logger = logging.getLogger(__name__)
    config = ctx.obj["config"]

    try:
        image = load_image(input_image, max_size=config.max_image_size)
        generator = MaskGenerator(
            wall_threshold=config.mask_wall_threshold, workers=config.workers
        )
        wall_mask = generator.generate_mask(
            image, target, tolerance if tolerance is not None else config.tolerance
        )
        save_mask(wall_mask, output)

        marked = int((wall_mask[..., 0] == 255).sum())
        click.echo(f"Mask marks {marked} pixels -> {Path(output)}")

    except Exception as e:
        logger.error(f"Error during mask generation: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
