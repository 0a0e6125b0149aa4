import argparse
from pathlib import Path
import sys

from loguru import logger

from .config import load_config
from .errors import DistanceFieldError
from .imaging import load_greyscale, save_greyscale, write_field
from .pipeline import generate_sdf


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="distfield",
        description="Convert a greyscale image into a signed distance field")
    parser.add_argument("input", nargs="?", default="input.png", help="Image to read")
    parser.add_argument("output", nargs="?", default="output.png",
                        help="Quantized 8-bit distance field image")
    parser.add_argument("--raw", default="output.bin",
                        help="Raw float32 distance field dump")
    parser.add_argument("--config", default=None, help="YAML file with settings")
    parser.add_argument("--set", dest="overrides", action="append", default=[],
                        metavar="KEY=VALUE", help="Override a setting, e.g. threshold=100")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        cfg = load_config(args.config, args.overrides)
        grid = load_greyscale(args.input)
        logger.info(f"Loaded {args.input} ({grid.width}x{grid.height})")
        result = generate_sdf(grid, cfg, write_back=True)
        save_greyscale(args.output, grid)
        try:
            write_field(args.raw, result.field)
        except DistanceFieldError:
            # outputs come as a pair
            Path(args.output).unlink(missing_ok=True)
            raise
    except DistanceFieldError as err:
        logger.error(f"{err.stage} stage failed: {err}")
        return 1
    logger.info(f"Wrote {args.output} and {args.raw}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
