import argparse
import logging
import sys
import time
from pathlib import Path

from valuemap.config import GRID_SIZE_MAX, GRID_SIZE_MIN, CellShape, GridConfig, ScaleConfig, Settings
from valuemap.loop import FpsCounter, run
from valuemap.render import format_value_map, render_image
from valuemap.sources import ImageSource

logger = logging.getLogger("valuemap")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert an image into a grid of darkness values")
    parser.add_argument("image", help="Path to input image (animated images yield one map per frame)")
    parser.add_argument("-g", "--columns", type=int, default=20, help="Grid columns (default: 20)")
    parser.add_argument("-r", "--rows", type=int, default=20, help="Grid rows (default: 20)")
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help=f"Square grid size, sets both columns and rows ({GRID_SIZE_MIN}-{GRID_SIZE_MAX})",
    )
    parser.add_argument("--scale", type=int, default=10, help="Top of the value scale (default: 10)")
    parser.add_argument("--min", type=int, default=0, dest="scale_min", help="Bottom of the value scale (default: 0)")
    parser.add_argument(
        "--shape",
        default="rectangle",
        choices=["rectangle", "square", "circle"],
        help="Cell footprint used for averaging (default: rectangle)",
    )
    parser.add_argument("-i", "--invert", action="store_true", default=False, help="Map lightness instead of darkness")
    parser.add_argument("-c", "--colour", action="store_true", default=False, help="Shade cells with truecolor ANSI")
    parser.add_argument("-o", "--output", default=None, help="Also write the last value map as a PNG")
    parser.add_argument("--width", type=int, default=480, help="Width in pixels of the PNG output (default: 480)")
    parser.add_argument("--loop", action="store_true", default=False, help="Loop animated images until interrupted")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    columns, rows = args.columns, args.rows
    if args.size is not None:
        if not GRID_SIZE_MIN <= args.size <= GRID_SIZE_MAX:
            raise ValueError(f"Grid size must be between {GRID_SIZE_MIN} and {GRID_SIZE_MAX}, got {args.size}")
        columns = rows = args.size
    return Settings(
        grid=GridConfig(columns=columns, rows=rows),
        scale=ScaleConfig(min=args.scale_min, max=args.scale),
        cell_shape=CellShape.parse(args.shape),
        invert=args.invert,
    )


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(message)s", datefmt="%H:%M:%S")

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    source = ImageSource(image_path, loop=args.loop)
    counter = FpsCounter()
    maps = []

    def show(value_map, fps):
        maps[:] = [value_map]
        if counter.total > 1:
            print()
        print(format_value_map(value_map, settings.scale, colour=args.colour))

    start = time.perf_counter()
    try:
        produced = run(source, settings, show, counter=counter)
    except KeyboardInterrupt:
        produced = counter.total
    finally:
        source.close()

    elapsed = time.perf_counter() - start
    if produced > 1 and elapsed > 0:
        logger.info("Processed %d frames at %.1f fps", produced, produced / elapsed)
    if args.output and maps:
        render_image(maps[0], settings, width=args.width).save(args.output)
        logger.info("Wrote %s", args.output)


if __name__ == "__main__":
    main()
