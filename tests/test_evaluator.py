"""Tests for the evaluator — line/rule matching and ordering."""

import threading

from docscan.engine.evaluator import evaluate, scan_text, split_lines
from docscan.findings.models import Finding
from docscan.rules.models import Rule


class TestLineSplitting:
    def test_splits_on_newline_only(self):
        assert split_lines("a\nb\nc") == ["a", "b", "c"]

    def test_crlf_keeps_carriage_return(self):
        assert split_lines("a\r\nb") == ["a\r", "b"]

    def test_empty_text_is_one_line(self):
        assert split_lines("") == [""]

    def test_trailing_newline_yields_empty_last_line(self):
        assert split_lines("a\n") == ["a", ""]


class TestEvaluate:
    def test_line_indexing(self):
        findings = evaluate("a\nb\nc", "f", [Rule(id="x", pattern="b")])
        assert len(findings) == 1
        assert findings[0].line == 2
        assert findings[0].context == "b"
        assert findings[0].file_id == "f"

    def test_round_trip_scenario(self):
        rule = Rule(id="r1", pattern="foo", severity="high", description="contains foo")
        text = "This document contains foo which should trigger a rule"
        findings = evaluate(text, "doc.txt", [rule])
        assert findings == [
            Finding(
                file_id="doc.txt",
                rule_id="r1",
                severity="high",
                line=1,
                context=text,
                description="contains foo",
            )
        ]

    def test_multiple_rules_same_line_in_rule_order(self):
        rules = [Rule(id="second", pattern="o"), Rule(id="first", pattern="f")]
        findings = evaluate("foo", "f", rules)
        assert [f.rule_id for f in findings] == ["second", "first"]
        assert all(f.line == 1 for f in findings)

    def test_one_rule_many_lines_in_line_order(self):
        findings = evaluate("foo\nbar\nfoo", "f", [Rule(id="x", pattern="foo")])
        assert [f.line for f in findings] == [1, 3]

    def test_lines_outer_rules_inner(self, sample_rules, sample_document):
        findings = evaluate(sample_document, "doc", sample_rules)
        assert [(f.line, f.rule_id) for f in findings] == [
            (2, "r1"),
            (3, "r2"),
            (4, "r1"),
            (4, "r2"),
        ]

    def test_one_finding_per_rule_per_line(self):
        findings = evaluate("foo foo foo", "f", [Rule(id="x", pattern="foo")])
        assert len(findings) == 1

    def test_uncompilable_pattern_is_inert(self):
        rules = [Rule(id="bad", pattern="["), Rule(id="good", pattern="a")]
        findings = evaluate("abc", "f", rules)
        assert [f.rule_id for f in findings] == ["good"]

    def test_empty_rule_set(self):
        assert evaluate("anything\nat all", "f", []) == []

    def test_empty_text_tested_as_one_line(self):
        findings = evaluate("", "f", [Rule(id="empty", pattern="^$")])
        assert len(findings) == 1
        assert findings[0].line == 1
        assert findings[0].context == ""

    def test_unanchored_search(self):
        findings = evaluate("xx needle xx", "f", [Rule(id="n", pattern="needle")])
        assert len(findings) == 1

    def test_no_implicit_case_folding(self):
        assert evaluate("FOO", "f", [Rule(id="x", pattern="foo")]) == []
        assert len(evaluate("FOO", "f", [Rule(id="x", pattern="(?i)foo")])) == 1

    def test_crlf_context_keeps_carriage_return(self):
        findings = evaluate("foo\r\nbar\r\n", "f", [Rule(id="x", pattern="foo")])
        assert findings[0].context == "foo\r"

    def test_severity_and_description_copied_verbatim(self):
        rule = Rule(id="x", pattern="a", severity="HIGH", description="desc")
        finding = evaluate("a", "f", [rule])[0]
        assert finding.severity == "HIGH"
        assert finding.description == "desc"

    def test_accepts_tuple_snapshot(self, store, sample_document):
        assert evaluate(sample_document, "doc", store.get_rules())


class TestDeterminism:
    def test_repeated_calls_identical(self, sample_rules, sample_document):
        first = evaluate(sample_document, "doc", sample_rules)
        for _ in range(5):
            assert evaluate(sample_document, "doc", sample_rules) == first

    def test_concurrent_calls_do_not_interfere(self, sample_rules, sample_document):
        expected = evaluate(sample_document, "doc", sample_rules)
        results = []
        lock = threading.Lock()

        def worker():
            out = evaluate(sample_document, "doc", sample_rules)
            with lock:
                results.append(out)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r == expected for r in results)


class TestScanText:
    def test_report_wraps_findings(self, sample_rules, sample_document):
        report = scan_text(sample_document, "doc", sample_rules)
        assert report.file_id == "doc"
        assert report.total_findings == 4
        assert report.rules_evaluated == 2
        assert report.severity_counts == {"high": 2, "medium": 2}
        assert report.scan_duration_ms >= 0

    def test_inert_rules_not_counted(self):
        report = scan_text("a", "f", [Rule(id="bad", pattern="("), Rule(id="ok", pattern="a")])
        assert report.rules_evaluated == 1
        assert report.total_findings == 1
