"""Shared test fixtures — sample rule sets, documents, stores."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from docscan.rules.models import Rule
from docscan.rules.store import RuleStore


@pytest.fixture
def sample_rules() -> list[Rule]:
    return [
        Rule(id="r1", pattern="foo", severity="high", description="contains foo"),
        Rule(id="r2", pattern=r"\d{3}-\d{2}-\d{4}", severity="medium", description="ssn-like"),
    ]


@pytest.fixture
def rules_yaml() -> str:
    return textwrap.dedent("""\
        rules:
          - id: r1
            pattern: "foo"
            severity: high
            description: contains foo
          - id: r2
            pattern: '\\d{3}-\\d{2}-\\d{4}'
            severity: Medium
            description: ssn-like
    """)


@pytest.fixture
def rules_file(tmp_path: Path, rules_yaml: str) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(rules_yaml)
    return path


@pytest.fixture
def duplicate_rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "dupes.yaml"
    path.write_text(textwrap.dedent("""\
        rules:
          - id: r1
            pattern: "a"
            severity: low
          - id: r1
            pattern: "b"
            severity: low
    """))
    return path


@pytest.fixture
def store(sample_rules: list[Rule]) -> RuleStore:
    return RuleStore(sample_rules)


@pytest.fixture
def sample_document() -> str:
    return textwrap.dedent("""\
        Quarterly summary
        This document contains foo which should trigger a rule
        Applicant SSN: 123-45-6789
        foo again, and 987-65-4321 too""")
