"""
Error taxonomy for the analysis pipeline.

Only the first two are expected in normal use; ambiguous questions never
raise, they fall back to a best-guess plan instead.
"""
from __future__ import annotations


class AnalysisError(Exception):
    """Base class; ``http_status`` is what the API layer responds with."""
    http_status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoDataLoadedError(AnalysisError):
    http_status = 400

    def __init__(self, message: str = "No data loaded. Upload a file first."):
        super().__init__(message)


class InvalidQuestionError(AnalysisError):
    http_status = 400

    def __init__(self, message: str = "Question is required"):
        super().__init__(message)


class InternalAnalysisFailure(AnalysisError):
    http_status = 500

    def __init__(self, message: str = "Failed to analyze question"):
        super().__init__(message)
