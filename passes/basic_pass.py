"""
Basic Annotation Pass
=====================

The judge's basic output is a JSON array of test cases, each carrying a
``name`` and a numeric ``passed`` score. This pass parses that array and
records every test in the shared collector.

Malformed payloads are dropped as a whole: nothing is recorded and nothing is
raised.
"""

from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from models.annotation_models import ParsedTestcases, ParseFailure, ParseOutcome, TestcaseResult
from passes.annotation_pass import AnnotationPass

# A JSON null is accepted and means "no test cases"
TESTCASES_ADAPTER = TypeAdapter(Optional[List[TestcaseResult]])


def parse_testcases(payload: str) -> ParseOutcome:
    """Parses the basic judge output into test-case results."""
    try:
        testcases = TESTCASES_ADAPTER.validate_json(payload)
    except ValidationError as e:
        return ParseFailure(reason=str(e))

    return ParsedTestcases(testcases=tuple(testcases or ()))


class BasicPass(AnnotationPass):
    name = "Basic"

    def analyze(self, outputs: Optional[str]):
        if outputs is None:
            return

        outcome = parse_testcases(outputs)
        if not outcome.ok:
            # Malformed output is ignored on purpose.
            return

        for testcase in outcome.testcases:
            self.add_testcase_result(testcase.name, testcase.score)
