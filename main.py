import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from configuration import Configuration as Config
from loggers.main_logger import main_logger as logger
from models.ort_result import load_ort_result
from sw360_sync import license_reporter
from timer import Timer


def parse_option(value: str) -> tuple:
    if "=" not in value:
        raise argparse.ArgumentTypeError(f"Expected key=value, got '{value}'")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError(f"Missing option key in '{value}'")
    return key, val.strip()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mirror the dependency trees of an ORT result into SW360 and upload license report files."
    )
    parser.add_argument(
        "ort_result",
        nargs="?",
        default=str(Path(Config.input_dir, Config.ort_result_file_name)),
        help="ORT result JSON file (default: input/ort-result.json)",
    )
    parser.add_argument(
        "--output-dir",
        default=str(Config.output_dir),
        help="Directory the report files are written to (default: output/)",
    )
    parser.add_argument(
        "-O", "--option",
        dest="options",
        action="append",
        type=parse_option,
        default=[],
        metavar="KEY=VALUE",
        help="Report option, e.g. -O projectName=MY_PRODUCT -O dependencyNetwork=true (repeatable)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    options: Dict[str, str] = dict(args.options)

    main_timer = Timer(logger)
    main_timer.start("starting main timer")
    try:
        logger.info(f"Reading {args.ort_result}")
        ort_result = load_ort_result(args.ort_result)
        logger.info(f"Report options: {license_reporter.resolve_options(options)}")

        output_files = license_reporter.generate_report(ort_result, Path(args.output_dir), options)
        logger.info(f"Wrote {len(output_files)} report files to {args.output_dir}")
    except Exception as e:
        logger.error(f"SW360 license report failed: {e}")
        return 1
    finally:
        main_timer.stop("stopping main timer")
        logger.info(main_timer.elapsed("Elapsed time for main:"))

    return 0


if __name__ == "__main__":
    sys.exit(main())
