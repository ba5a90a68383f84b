"""Finding models."""

from docscan.findings.models import Finding, ScanReport

__all__ = ["Finding", "ScanReport"]
