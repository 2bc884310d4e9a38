"""
Annotation Pass Base
====================

A pass is a named unit of analysis that consumes raw judge output and reports
scored test-case results into a shared collector.

Line-oriented analysis is a capability handed to the pass rather than a method
to override: any callable taking (pass, lines) works, and ``ignore_lines`` is
the default that does nothing.
"""

from typing import Callable, Iterable, Optional

from analytics.results import ResultCollector

LineAnalyzer = Callable[["AnnotationPass", Iterable[str]], None]


def ignore_lines(annotation_pass: "AnnotationPass", lines: Iterable[str]) -> None:
    """Default line analyzer; reports nothing."""


class AnnotationPass:
    name = "Unnamed"
    line_analyzer: LineAnalyzer = staticmethod(ignore_lines)

    def __init__(self, collector: ResultCollector, line_analyzer: Optional[LineAnalyzer] = None):
        self.collector = collector
        if line_analyzer is not None:
            self.line_analyzer = line_analyzer

    def add_testcase_result(self, name: str, score: float):
        self.collector.add(name, score, pass_name=self.name)

    def analyze_lines(self, lines: Iterable[str]):
        self.line_analyzer(self, lines)

    def analyze(self, outputs: Optional[str]):
        """Splits the raw output into lines and runs the line analyzer over them."""
        if outputs is None:
            return

        self.analyze_lines(outputs.splitlines())
