#!/usr/bin/env python3
"""
Halftone - Main Entry Point

Converts image files to print-ready halftone PNGs.
Run with: python -m halftone.main photo1.jpg photo2.png --zip out.zip
"""

import argparse
import logging
import queue
import sys
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, List, Optional

from .batch import BatchOrchestrator
from .core import (
    BatchProgress, BatchRequest, DecodeFailure, InvalidOptions, Job,
    ProcessingOptions, DitherMode, ToneMode
)
from .io import archive_name, batch_archive_name, load_options, write_zip

logger = logging.getLogger("halftone")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="halftone",
        description="Convert images to black & white halftones sized for printing."
    )
    parser.add_argument("inputs", nargs="+", help="Input image files.")
    parser.add_argument(
        "--output-dir", "-o", type=Path,
        help="Directory to write processed PNGs into."
    )
    parser.add_argument(
        "--zip", "-z", type=Path, nargs="?", const=Path(""), default=None,
        help="Also pack results into a ZIP (default name: halftone_batch_<ms>.zip)."
    )
    parser.add_argument("--preset", type=Path, help="JSON options preset to start from.")
    parser.add_argument("--width-cm", type=float, help="Printed width in centimetres.")
    parser.add_argument("--dpi", type=float, help="Printer resolution in DPI.")
    parser.add_argument("--contrast", type=float, help="Contrast factor (0.8 - 2.0).")
    parser.add_argument("--threshold", type=float, help="Black/white threshold (0 - 255).")
    parser.add_argument(
        "--mode", choices=[m.value for m in DitherMode],
        help="Dithering: floyd (error diffusion) or binary (flat threshold)."
    )
    parser.add_argument(
        "--tone", choices=[t.value for t in ToneMode],
        help="Output tone: bw, gray or color passthrough."
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser


def collect_options(args: argparse.Namespace) -> ProcessingOptions:
    """Start from the preset (or defaults) and apply command-line overrides."""
    base = ProcessingOptions()
    if args.preset is not None:
        loaded = load_options(args.preset)
        if loaded is None:
            raise InvalidOptions(f"Could not load preset {args.preset}")
        base = loaded

    data = base.to_dict()
    overrides = {
        "output_width_cm": args.width_cm,
        "print_dpi": args.dpi,
        "contrast": args.contrast,
        "threshold": args.threshold,
        "mode": args.mode,
        "tone_mode": args.tone,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ProcessingOptions.from_dict(data)


def load_jobs(paths: List[str]) -> List[Job]:
    jobs = []
    for i, filepath in enumerate(paths):
        try:
            jobs.append(Job.from_file(filepath, job_id=f"{i}"))
        except (OSError, DecodeFailure) as e:
            logger.warning("Skipping %s: %s", filepath, e)
    return jobs


def print_progress(update: BatchProgress):
    print(f"Progress: {update.percent}% ({update.current}/{update.total})")


def report_progress(progress: "queue.Queue[BatchProgress]", future: Future,
                    printer: Callable[[BatchProgress], None] = print_progress) -> int:
    """
    Print progress messages until the batch resolves.

    Progress is always queued before the future resolves, so once it is
    done the remaining messages are drained without blocking.

    Returns:
        Number of messages reported
    """
    reported = 0
    while not future.done():
        try:
            update = progress.get(timeout=0.1)
        except queue.Empty:
            continue
        printer(update)
        reported += 1

    while True:
        try:
            update = progress.get_nowait()
        except queue.Empty:
            return reported
        printer(update)
        reported += 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the halftone command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    try:
        options = collect_options(args)
    except (InvalidOptions, ValueError) as e:
        logger.error("Invalid options: %s", e)
        return 2

    jobs = load_jobs(args.inputs)
    if not jobs:
        logger.error("No images to process")
        return 1
    logger.info("Prepared %d image(s)", len(jobs))

    progress: "queue.Queue" = queue.Queue()
    orchestrator = BatchOrchestrator(progress_queue=progress)
    try:
        future = orchestrator.submit(BatchRequest(jobs=jobs, options=options))
    except InvalidOptions as e:
        logger.error("Invalid options: %s", e)
        return 2

    report_progress(progress, future)
    response = future.result()

    if args.output_dir is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        for idx, result in enumerate(response.results, start=1):
            (args.output_dir / archive_name(idx, result)).write_bytes(result.output)
        logger.info("Wrote %d file(s) to %s", len(response.results), args.output_dir)

    if args.zip is not None:
        zip_path = args.zip if str(args.zip) not in ("", ".") else Path(batch_archive_name())
        write_zip(response.results, zip_path)
        logger.info("Wrote archive %s", zip_path)

    logger.info("Done in %.2fs", response.duration_ms / 1000.0)
    return 1 if response.fallback_count else 0


if __name__ == "__main__":
    sys.exit(main())
