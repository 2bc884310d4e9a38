import argparse
import logging
import os
import sys
from typing import Dict, List, Optional, Sequence, Type

from analytics.results import DEFAULT_PASSING_SCORE, ResultCollector
from fetcher.output_fetcher import DEFAULT_TIMEOUT, AnnotationBotError, read_outputs
from passes.annotation_pass import AnnotationPass
from passes.basic_pass import BasicPass


# ==========================================
# PASS REGISTRY
# ==========================================

PASSES: Dict[str, Type[AnnotationPass]] = {
    BasicPass.name: BasicPass,
}


class UnknownPassError(AnnotationBotError):
    pass


class AnnotationBot:
    """Runs every selected pass over the same raw judge output."""

    def __init__(self, pass_names: Optional[Sequence[str]] = None,
                 collector: Optional[ResultCollector] = None):
        self.collector = collector if collector is not None else ResultCollector()

        names = list(pass_names) if pass_names else list(PASSES)
        unknown = [n for n in names if n not in PASSES]
        if unknown:
            raise UnknownPassError(
                f"Unknown pass(es): {', '.join(unknown)}. Available: {', '.join(PASSES)}"
            )

        # Registration order, whatever order they were requested in
        self.passes: List[AnnotationPass] = [
            PASSES[n](self.collector) for n in PASSES if n in names
        ]

    def run(self, outputs: Optional[str]) -> ResultCollector:
        for annotation_pass in self.passes:
            before = len(self.collector)
            annotation_pass.analyze(outputs)
            logging.info(f"{annotation_pass.name}: {len(self.collector) - before} result(s)")
        return self.collector


# ==========================================
# OUTPUT FORMATTING
# ==========================================

def render_report(collector: ResultCollector, passing_score: float = DEFAULT_PASSING_SCORE) -> str:
    if len(collector) == 0:
        return "No test results recorded."

    results = collector.to_frame()
    summary = collector.summary(passing_score)

    return "\n".join([
        "Test results",
        results.to_string(index=False),
        "",
        "Summary",
        summary.to_string(),
    ])


# ==========================================
# CONFIGURATION & MAIN
# ==========================================

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def env_passes() -> Optional[List[str]]:
    value = os.getenv("ANNOTATION_BOT_PASSES", "")
    names = [n.strip() for n in value.split(",") if n.strip()]
    return names or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kernel-annotation-bot",
        description="Annotates kernel judge output with scored test-case results."
    )
    parser.add_argument("source", nargs="?", default=os.getenv("ANNOTATION_BOT_SOURCE", "-"),
                        help="File path, http(s) URL, or '-' for stdin")
    parser.add_argument("--pass", dest="passes", action="append", default=None,
                        help=f"Pass to run (repeatable). Available: {', '.join(PASSES)}")
    parser.add_argument("--passing-score", type=float,
                        default=os.getenv("ANNOTATION_BOT_PASSING_SCORE", str(DEFAULT_PASSING_SCORE)))
    parser.add_argument("--timeout", type=float,
                        default=os.getenv("ANNOTATION_BOT_TIMEOUT", str(DEFAULT_TIMEOUT)))
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        default=os.getenv("ANNOTATION_BOT_LOG_LEVEL", "INFO"))
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # argparse does not check choices against a default taken from the environment
    if args.log_level not in LOG_LEVELS:
        parser.error(f"argument --log-level: invalid choice: '{args.log_level}' (choose from {', '.join(LOG_LEVELS)})")
    logging.basicConfig(level=args.log_level, format='%(levelname)s: %(message)s')

    try:
        bot = AnnotationBot(args.passes or env_passes())
        outputs = read_outputs(args.source, timeout=args.timeout)
    except AnnotationBotError as e:
        logging.error(e)
        return 1

    collector = bot.run(outputs)
    print(render_report(collector, args.passing_score))
    return 0


if __name__ == "__main__":
    sys.exit(main())
