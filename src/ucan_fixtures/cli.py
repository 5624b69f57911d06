import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import GeneratorConfig
from .errors import FixtureError
from .generators import generate_catalog, write_catalog
from .identities import Identities

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UCAN conformance fixture generator")
    parser.add_argument("--config", help="JSON config file (see GeneratorConfig)")
    parser.add_argument("--output-dir", help="Directory fixtures are written under")
    parser.add_argument("--version", dest="ucan_version", help="UCAN version (ucv)")
    parser.add_argument(
        "--no-strict",
        action="store_true",
        help="Skip and report failed scenarios instead of aborting",
    )
    parser.add_argument("--indent", type=int, help="Indent written JSON")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def configure(args: argparse.Namespace) -> GeneratorConfig:
    config = GeneratorConfig.load(Path(args.config)) if args.config else GeneratorConfig()
    if args.output_dir:
        config.output_dir = Path(args.output_dir)
    if args.ucan_version:
        config.version = args.ucan_version
    if args.no_strict:
        config.strict = False
    if args.indent is not None:
        config.indent = args.indent
    if args.log_level:
        config.log_level = args.log_level.upper()
    return config


async def run(config: GeneratorConfig) -> list[Path]:
    catalog = await generate_catalog(
        Identities.load(), version=config.version, strict=config.strict
    )
    for outcome in catalog.skipped:
        logger.warning(f"Skipped {outcome.task}/{outcome.name}: {outcome.error.code}")
    return write_catalog(catalog, config.output_path, config.indent)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = configure(args)
        logging.basicConfig(
            level=getattr(logging, config.log_level, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        written = asyncio.run(run(config))
    except FixtureError as e:
        print(f"Fixture generation failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error generating fixtures: {e}", file=sys.stderr)
        sys.exit(2)

    logger.info(f"Wrote {len(written)} files to {config.output_path}")
    sys.exit(0)


if __name__ == "__main__":
    main()
