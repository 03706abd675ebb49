"""
Exception hierarchy for brand analysis.

Input and acquisition failures surface as HTTP errors; classification
failures never leave the vibe classifier.
"""

from typing import Optional, Dict, Any


class BrandAnalysisError(Exception):
    """Base exception for all brand analysis errors"""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context or {}

    def __str__(self):
        parts = [self.message]
        if self.cause:
            parts.append(f" (caused by: {type(self.cause).__name__}: {str(self.cause)})")
        if self.context:
            parts.append(f" Context: {self.context}")
        return "".join(parts)


# === Request-level exceptions ===

class InvalidTargetError(BrandAnalysisError):
    """Target locator missing or not an absolute http(s) URL"""
    pass


class PageRenderError(BrandAnalysisError):
    """Renderer could not produce a page tree (navigation, timeout, HTTP status)"""
    pass


class SignalExtractionError(BrandAnalysisError):
    """An extractor raised unexpectedly while reading the page tree"""
    pass


# === Classification exceptions ===

class VibeClassificationError(BrandAnalysisError):
    """Base for backend failures; converted to sentinel values by the classifier"""
    pass


class VibeBackendError(VibeClassificationError):
    """Backend invocation failed or returned nothing"""
    pass


class VibeResponseError(VibeClassificationError):
    """Backend returned a response that is not the expected JSON object"""
    pass
