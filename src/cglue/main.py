"""Main entry point for the cglue binding generator."""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from .domain.models.entities import Namespace
from .domain.services.generation import CHeaderGenerator, CSourceGenerator, ExternGenerator
from .domain.services.parsing import TextParser
from .domain.services.specializations import register_std_types
from .infrastructure.config import Config
from .infrastructure.logging import LoggerSetup, get_logger, log_timing
from .utils.path_utils import (
    create_extern_filename,
    create_header_filename,
    create_source_filename,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cglue",
        description="Generate a flat C interface (header and C++ wrappers) "
        "from C++ API declarations",
        epilog="""
Examples:
  # Generate opencv.h and opencv.cc into ./output
  cglue declarations.txt --library-name opencv

  # Several declaration files, custom output directory, wrapped library header
  cglue core.txt imgproc.txt -o bindings/ --library-name opencv --include "<opencv2/core.hpp>"

  # Resolve unqualified names against the cv namespace, abort on the first error
  cglue declarations.txt --use-namespace cv --strict

  # Also write opencv_extern.txt for libraries built on top of this one
  cglue declarations.txt --library-name opencv --extern

  # Using .env file for configuration
  echo 'CGLUE_INPUT_FILES=declarations.txt' > .env
  cglue --verbose
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input_files",
        type=Path,
        nargs="*",
        help="Declaration files to read (optional if using .env)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory for the generated files (default: ./output)",
    )
    parser.add_argument(
        "--library-name",
        type=str,
        help="Base name of the generated files and include guard",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="HEADER",
        help="Header of the wrapped library to include in the generated source "
        "(repeatable; use <...> for system headers)",
    )
    parser.add_argument(
        "--std-types",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Register std::vector, std::map and std::string (default: on)",
    )
    parser.add_argument(
        "--use-namespace",
        action="append",
        default=[],
        metavar="NS",
        help="Make the types of a namespace visible at global scope (repeatable)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Abort on the first declaration that cannot be applied",
    )
    parser.add_argument(
        "--extern",
        action="store_true",
        default=None,
        help="Also write <library>_extern.txt declaring the exported types as /Extern",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Enable verbose output with debug logs",
    )
    return parser.parse_args(argv)


def build_model(config: Config, use_namespaces: Sequence[str] = ()) -> TextParser:
    """Create the root scope and parse every input file into it.

    Returns:
        The parser, holding the root scope and the recorded errors
    """
    logger = get_logger(__name__)
    root = Namespace.create_root(config.model)
    if config.std_types:
        register_std_types(root)
    for name in use_namespaces:
        root.use_namespace(root.add_namespace(name))
        logger.debug(f"Using namespace {name}")

    parser = TextParser(root, strict=config.strict)
    for path in config.input_files:
        logger.info(f"Parsing {path}")
        parser.parse_file(path)
    parser.progress.report_summary()
    return parser


def write_bindings(root: Namespace, config: Config) -> tuple[Path, Path]:
    """Write ``<library>.h`` and ``<library>.cc`` (and the extern declarations if enabled)."""
    logger = get_logger(__name__)
    config.ensure_output_dir()

    header_name = create_header_filename(config.library_name)
    header_path = config.output_dir / header_name
    header = CHeaderGenerator(root).generate_header(config.library_name)
    header_path.write_text(header, encoding="utf-8")
    logger.info(f"[SUCCESS] Generated: {header_path} ({len(header)} bytes)")

    source_path = config.output_dir / create_source_filename(config.library_name)
    source = CSourceGenerator(root).generate_source(header_name, config.includes)
    source_path.write_text(source, encoding="utf-8")
    logger.info(f"[SUCCESS] Generated: {source_path} ({len(source)} bytes)")

    if config.extern:
        extern_path = config.output_dir / create_extern_filename(config.library_name)
        extern = ExternGenerator(root).generate_extern()
        extern_path.write_text(extern, encoding="utf-8")
        logger.info(f"[SUCCESS] Generated: {extern_path} ({len(extern)} bytes)")

    return header_path, source_path


@log_timing
def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point: parse declarations and write the C bindings."""
    args = parse_args(argv)

    try:
        config = Config.from_args(
            input_files=args.input_files,
            output_dir=args.output,
            library_name=args.library_name,
            verbose=args.verbose,
            includes=args.include,
            std_types=args.std_types,
            strict=args.strict,
            extern=args.extern,
        )
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    logger = get_logger(__name__)
    logger.debug(f"Input files: {', '.join(str(p) for p in config.input_files)}")
    logger.debug(f"Output directory: {config.output_dir}")

    try:
        parser = build_model(config, args.use_namespace)
        write_bindings(parser.root, config)
    except Exception as e:
        logger.error(f"Fatal error during generation: {e}")
        if config.verbose:
            logger.exception("Traceback")
        sys.exit(1)

    logger.info("=" * 70)
    logger.info("GENERATION SUMMARY")
    logger.info("=" * 70)
    logger.info(f"Input files: {len(config.input_files)}")
    logger.info(f"Declarations applied: {parser.progress.declaration_count}")
    logger.info(f"Declarations failed: {len(parser.errors)}")
    for error in parser.errors:
        logger.info(f"  - {error}")

    sys.exit(0 if not parser.errors else 1)


if __name__ == "__main__":
    main()
