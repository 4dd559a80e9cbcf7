from __future__ import annotations

from prescription_reader.config import Settings, settings as default_settings
from prescription_reader.analyzers.base import AnalyzerConfig
from prescription_reader.analyzers.hosted_analyzer import (
    HostedImageAnalyzer,
    PrescriptionAnalyzer,
    TranscriptionAnalyzer,
)
from prescription_reader.analyzers.transport_mock import MockTransport

ANALYZERS = {
    "structured": PrescriptionAnalyzer,
    "text": TranscriptionAnalyzer,
}


def analyzer_config_from_settings(s: Settings) -> AnalyzerConfig:
    return AnalyzerConfig(api_key=s.gemini_api_key, model_id=s.model_id)


def normalized_mode(s: Settings) -> str:
    return (s.analysis_mode or "structured").strip().lower()


def normalized_provider(s: Settings) -> str:
    return (s.model_provider or "gemini").strip().lower()


def create_analyzer(s: Settings = default_settings) -> HostedImageAnalyzer:
    """
    Pick the analysis mode and the model transport at integration time.

    The Gemini transport is imported lazily so mock mode starts without the SDK.
    """
    mode = normalized_mode(s)
    provider = normalized_provider(s)

    try:
        analyzer_cls = ANALYZERS[mode]
    except KeyError:
        raise ValueError(f"Unsupported analysis mode: {mode}") from None

    config = analyzer_config_from_settings(s)

    if provider == "mock":
        return analyzer_cls(config, transport=MockTransport())

    if provider == "gemini":
        from prescription_reader.analyzers.transport_gemini import GeminiTransport

        return analyzer_cls(config, transport=GeminiTransport(config))

    raise ValueError(f"Unsupported model provider: {provider}")
