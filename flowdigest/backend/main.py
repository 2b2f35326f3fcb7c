from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Sequence

from .aggregation import Aggregator, now_ms
from .config import LOG_LEVELS, settings
from .storage import OutputWriteError, RunDocument, write_document

logger = logging.getLogger("flowdigest.main")


def run(
    input_dir: str,
    output_dir: str,
    output_prefix: str,
    json_indent: int = 2,
    log_rejected: bool = False,
    start_time: int | None = None,
) -> tuple[str, int]:
    """
    Aggregate every file in `input_dir` and write one document to `output_dir`.

    Returns:
        (output path, number of flows written)

    Raises:
        OutputWriteError: the document could not be persisted.
    """
    if start_time is None:
        start_time = now_ms()

    aggregator = Aggregator(
        input_dir=input_dir,
        log_rejected=log_rejected,
    )
    result = aggregator.run(start_time=start_time)

    document = RunDocument.build(result.metadata, result.flows)
    path = write_document(
        document,
        output_dir=output_dir,
        prefix=output_prefix,
        indent=json_indent,
    )
    return path, len(document.data)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Aggregate firewall/flow log lines into per-flow traffic totals",
    )
    parser.add_argument("--input-dir",  default=settings.INPUT_DIR)
    parser.add_argument("--output-dir", default=settings.OUTPUT_DIR)
    parser.add_argument("--log-level",  default=settings.LOG_LEVEL, choices=list(LOG_LEVELS))
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    start_time = now_ms()
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        path, flows = run(
            args.input_dir,
            args.output_dir,
            output_prefix=settings.OUTPUT_PREFIX,
            json_indent=settings.JSON_INDENT,
            log_rejected=settings.LOG_REJECTED_LINES,
            start_time=start_time,
        )
    except OutputWriteError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Master record written to {path} with {flows} unique keys.", flush=True)
    sys.exit(0)


if __name__ == "__main__":
    main()
