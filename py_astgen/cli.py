"""
Command line entry point.

Generates one asteroid and writes whichever outputs were asked for:

    astgen 5000 -i 4 -s 2 -b 1.5 --wg rock.png --wc rock_color.png --wl layer_
"""

import argparse
import sys
from typing import List, Optional

import structlog

from .config import settings
from .core.asteroid import GeneratedAsteroid, generate
from .core.raster_mask import Norm
from .utils.logging_config import configure_logging

logger = structlog.get_logger()


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _byte(value: str) -> int:
    number = int(value)
    if not 0 <= number <= 255:
        raise argparse.ArgumentTypeError(f"must be between 0 and 255, got {number}")
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="astgen",
        description="Generate image of a something like rock/asteroid",
    )
    parser.add_argument(
        "area", type=_positive_int, help="Size of the generated rock in number of pixels"
    )
    parser.add_argument(
        "-i",
        "--intensities",
        type=_positive_int,
        default=1,
        help="Number of intensities that will be present in the final image",
    )
    parser.add_argument(
        "-s",
        "--smoothen",
        type=_byte,
        help="Dilation radius smoothing the fuzzy edge of every band; "
        "sensible values are 1 to about 10 depending on the area",
    )
    parser.add_argument(
        "-b", "--blur", type=_non_negative_float, help="Sigma of the Gaussian blur"
    )
    parser.add_argument("--wl", metavar="PREFIX", help="Base name of layer images to write")
    parser.add_argument("--wg", metavar="PATH", help="Grayscale image to write")
    parser.add_argument("--wc", metavar="PATH", help="Color image to write")
    parser.add_argument(
        "--axis",
        nargs=2,
        type=float,
        metavar=("X", "Y"),
        help="Growth axis; elongates the rock along this direction",
    )
    parser.add_argument(
        "--hue",
        nargs=3,
        type=_byte,
        metavar=("R", "G", "B"),
        help="Base colour of the color image (default white)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument(
        "--cumulative-layers",
        action="store_true",
        help="Each layer image also shows all earlier layers",
    )
    parser.add_argument(
        "--kernel",
        choices=[norm.value for norm in Norm],
        default=Norm.LINF.value,
        help="Footprint shape used for smoothing",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=settings.log_level.upper(),
        help="Log level",
    )
    return parser


def build_asteroid(args: argparse.Namespace) -> GeneratedAsteroid:
    """Generate, smoothen and blur as requested."""
    axis = tuple(args.axis) if args.axis else None
    asteroid = generate(args.area, args.intensities, axis, seed=args.seed)

    if args.smoothen is not None:
        asteroid = asteroid.smoothen_all(args.smoothen, Norm(args.kernel))

    if args.blur is not None:
        asteroid = asteroid.blur_gray(args.blur)

    if args.wc and args.hue:
        asteroid = asteroid.combine_colored(tuple(args.hue))

    return asteroid


def write_outputs(asteroid: GeneratedAsteroid, args: argparse.Namespace) -> None:
    """Write outputs in a fixed order: layers, grayscale, color."""
    if args.wl:
        asteroid = asteroid.save_layers(args.wl, cumulative=args.cumulative_layers)

    if args.wg:
        asteroid = asteroid.save_gray(args.wg)

    if args.wc:
        asteroid = asteroid.save_colored(args.wc)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, settings.log_format)

    try:
        asteroid = build_asteroid(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        write_outputs(asteroid, args)
    except OSError as exc:
        logger.error("Failed to write output", error=str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
