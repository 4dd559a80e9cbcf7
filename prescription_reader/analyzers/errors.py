from __future__ import annotations

from typing import Optional


class AnalysisError(RuntimeError):
    """
    Base class for every failure of the analyze operation.

    `user_message` is the fixed, generic text shown to end users. The
    exception's own args may carry diagnostic detail; that detail is logged,
    never displayed.
    """

    code = "analysis_failed"
    user_message = "Image analysis failed."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.user_message)


class ConfigurationError(AnalysisError):
    """No access credential configured. Fatal, not retryable."""

    code = "configuration_error"
    user_message = "API key is not configured."


class MalformedEncodingError(AnalysisError):
    """The encoded image did not have the expected data URI shape."""

    code = "malformed_encoding"
    user_message = "Failed to parse base64 string."


class ModelCallError(AnalysisError):
    """Any transport- or model-level failure of the hosted model call."""

    code = "model_call_failed"
    user_message = "Failed to get a response from the AI model."


class ResponseFormatError(AnalysisError):
    """Structured mode only: the reply was not JSON matching the record schema."""

    code = "invalid_model_output"
    user_message = "Failed to parse the response from the AI model. The format might be incorrect."
