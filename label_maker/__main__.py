import argparse
import sys
from dataclasses import replace
from pathlib import Path

import requests

from label_maker.config.logger_config import logger
from label_maker.config.settings import LabelMakerSettings
from label_maker.label import run_label


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="label_maker",
        description="Flag nations that ceased to exist (CTE) on a NationStates page.",
    )
    parser.add_argument("page", help="HTML file path or http(s) URL")
    parser.add_argument("-o", "--output", type=Path, default=None, help="where to write the labelled page")
    parser.add_argument("--store", type=Path, default=None, help="sqlite store for the cache and User-Agent")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = LabelMakerSettings.from_env()
    if args.store is not None:
        settings = replace(settings, store_path=args.store)

    try:
        summary = run_label(args.page, output_path=args.output, settings=settings)
    except (requests.RequestException, OSError) as exc:
        logger.error("Failed to label {}: {}", args.page, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(
        f"snapshot={summary.snapshot_origin} names={summary.snapshot_size} "
        f"flagged={summary.flagged_total} output={summary.output_path}"
    )
    return 0


# python -m label_maker page.html
if __name__ == "__main__":
    sys.exit(main())
