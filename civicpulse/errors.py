"""
Exceptions raised by the CivicPulse pipeline.
"""


class InvalidInput(ValueError):
    """Raised when the pipeline is called without feedback text."""


class ReportGenerationError(RuntimeError):
    """Raised by an external report generator that could not produce a report."""
