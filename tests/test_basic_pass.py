import pytest

from analytics.results import ResultCollector
from mock_data import KERNEL_RUN, KERNEL_RUN_OUTPUT, MALFORMED_OUTPUTS, VALID_OUTPUT, WRONG_SHAPE_OUTPUTS
from passes.annotation_pass import AnnotationPass, ignore_lines
from passes.basic_pass import BasicPass, parse_testcases


class RecordingCollector(ResultCollector):
    def __init__(self):
        super().__init__()
        self.calls = []

    def add(self, name, score, pass_name=None):
        self.calls.append((name, score))
        super().add(name, score, pass_name=pass_name)


@pytest.fixture
def collector():
    return RecordingCollector()


def test_valid_output_adds_each_record_in_order(collector):
    BasicPass(collector).analyze(VALID_OUTPUT)

    assert collector.calls == [("t1", 0.5), ("t2", 1.0)]


def test_results_are_tagged_with_pass_name(collector):
    BasicPass(collector).analyze(VALID_OUTPUT)

    assert {r.pass_name for r in collector.results} == {"Basic"}


def test_duplicates_and_integer_scores_are_kept(collector):
    BasicPass(collector).analyze(KERNEL_RUN_OUTPUT)

    assert collector.calls == [(t["name"], float(t["passed"])) for t in KERNEL_RUN]
    assert all(isinstance(score, float) for _, score in collector.calls)


def test_none_output_is_a_noop(collector):
    BasicPass(collector).analyze(None)

    assert collector.calls == []


def test_null_and_empty_array_add_nothing(collector):
    basic = BasicPass(collector)
    basic.analyze("null")
    basic.analyze("[]")

    assert collector.calls == []


@pytest.mark.parametrize("outputs", WRONG_SHAPE_OUTPUTS)
def test_wrong_shape_is_ignored(collector, outputs):
    BasicPass(collector).analyze(outputs)

    assert collector.calls == []


@pytest.mark.parametrize("outputs", MALFORMED_OUTPUTS)
def test_malformed_json_is_ignored(collector, outputs):
    BasicPass(collector).analyze(outputs)

    assert collector.calls == []


def test_extra_fields_are_ignored(collector):
    BasicPass(collector).analyze('[{"name": "t1", "passed": 0.25, "time": 3}]')

    assert collector.calls == [("t1", 0.25)]


def test_analyze_lines_does_nothing(collector):
    BasicPass(collector).analyze_lines(["[{\"name\": \"t1\", \"passed\": 1.0}]"])

    assert collector.calls == []


def test_parse_testcases_reports_failure_reason():
    outcome = parse_testcases('[{"name": "t1"}]')

    assert not outcome.ok
    assert "passed" in outcome.reason


def test_parse_testcases_success():
    outcome = parse_testcases(VALID_OUTPUT)

    assert outcome.ok
    assert [(t.name, t.score) for t in outcome.testcases] == [("t1", 0.5), ("t2", 1.0)]


def test_parse_testcases_integer_score_becomes_float():
    outcome = parse_testcases('[{"name": "t1", "passed": 1}]')

    assert outcome.ok
    assert outcome.testcases[0].score == 1.0
    assert isinstance(outcome.testcases[0].score, float)


@pytest.mark.parametrize("outputs", [
    '[{"name": "t1", "passed": true}]',
    '[{"name": "t1", "passed": "0.5"}]',
    '[{"name": 7, "passed": 0.5}]',
    '[{"name": "t1", "passed": 1e400}]',
])
def test_parse_testcases_rejects_loose_types(outputs):
    assert not parse_testcases(outputs).ok


def test_parse_testcases_null_is_empty_success():
    outcome = parse_testcases("null")

    assert outcome.ok
    assert outcome.testcases == ()


def test_default_line_analyzer_is_empty(collector):
    base = AnnotationPass(collector)
    base.analyze("line one\nline two")

    assert base.line_analyzer is ignore_lines
    assert collector.calls == []


def test_custom_line_analyzer_receives_lines(collector):
    def score_ok_lines(annotation_pass, lines):
        for line in lines:
            name, _, status = line.partition(" ")
            annotation_pass.add_testcase_result(name, 1.0 if status == "OK" else 0.0)

    AnnotationPass(collector, line_analyzer=score_ok_lines).analyze("a OK\nb FAIL")

    assert collector.calls == [("a", 1.0), ("b", 0.0)]
