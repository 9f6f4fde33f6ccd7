"""Command line entry point running one LWR or LLR analysis end to end.

Example:
    lwr-tlbx lwr --source https://example.org/lwr.xlsx --output-dir results/
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable
from pathlib import Path

from lwr_tlbx.analysis.pipeline import AnalysisOutcome, analyze
from lwr_tlbx.config import DEFAULT_CONFIG, AnalysisConfig
from lwr_tlbx.data.morphometry_dataset import MorphometryDataset
from lwr_tlbx.data.relationship import RelationshipKind
from lwr_tlbx.errors import LwrTlbxError
from lwr_tlbx.output import DirectorySink, OutputSink, export_outcome
from lwr_tlbx.utils.paths import get_output_dir


logger = logging.getLogger(__name__)


def run_analysis(
    source: str | Path,
    kind: RelationshipKind,
    sink: OutputSink,
    *,
    cache_path: str | Path | None = None,
    refresh: bool = False,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> AnalysisOutcome:
    """Load ``source``, run the analysis and export its artifacts to ``sink``."""
    dataset = MorphometryDataset.load(source, kind, cache_path=cache_path, refresh=refresh)
    outcome = analyze(dataset, kind, config)
    export_outcome(outcome, sink)
    return outcome


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lwr-tlbx",
        description="Fit length-weight (lwr) or length-length (llr) relationships of fish morphometry data.",
    )
    p.add_argument("kind", choices=[k.value for k in RelationshipKind], help="Relationship to analyze")
    p.add_argument("--source", required=True, help="URL or local path of the measurement spreadsheet")
    p.add_argument("--cache", default=None, help="Where a downloaded spreadsheet is cached")
    p.add_argument(
        "--output-dir",
        default=None,
        help="Directory for workbooks and figures (default: $LWR_TLBX_OUTPUT_DIR or ./output)",
    )
    p.add_argument("--refresh", action="store_true", help="Download the spreadsheet even if it is cached")
    p.add_argument(
        "--outlier-threshold",
        type=float,
        default=DEFAULT_CONFIG.outlier_threshold,
        help="Absolute standardized residual at which rows are dropped (default: %(default)s)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: Iterable[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    config = AnalysisConfig(outlier_threshold=args.outlier_threshold)
    kind = RelationshipKind(args.kind)
    try:
        sink = DirectorySink(get_output_dir(args.output_dir))
    except OSError as exc:
        logger.error("Cannot create output directory: %s", exc)
        return 1

    logger.info("Running %s analysis of %s into %s", kind.value.upper(), args.source, sink.root)
    try:
        outcome = run_analysis(args.source, kind, sink, cache_path=args.cache, refresh=args.refresh, config=config)
    except LwrTlbxError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Done. Model path: %s", outcome.dimorphism.path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
