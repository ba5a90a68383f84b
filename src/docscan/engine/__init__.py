"""Evaluator — match rule sets against text."""

from docscan.engine.evaluator import evaluate, scan_text, split_lines

__all__ = ["evaluate", "scan_text", "split_lines"]
