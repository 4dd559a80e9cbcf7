from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from prescription_reader.analyzers.base import AnalysisResult, AnalyzerConfig, ModelTransport
from prescription_reader.analyzers.errors import (
    AnalysisError,
    ConfigurationError,
    ModelCallError,
)
from prescription_reader.analyzers.parsing import parse_prescription_record
from prescription_reader.analyzers.prompting import (
    AnalysisRequest,
    build_extraction_request,
    build_transcription_request,
)
from prescription_reader.analyzers.schema import PrescriptionRecord
from prescription_reader.encoding.image_encoder import EncodedImage, ImageBlob, encode_image
from prescription_reader.observability.metrics import ANALYSIS_REQUESTS_TOTAL, MODEL_CALL_SECONDS

logger = logging.getLogger(__name__)


class HostedImageAnalyzer(ABC):
    """
    Shared flow for both modes:

    credential check -> encode -> build request -> one model call -> decode.

    Subclasses only decide how the request is built and how the reply is decoded.
    """

    mode = "base"

    def __init__(self, config: AnalyzerConfig, transport: Optional[ModelTransport] = None):
        self._config = config
        if transport is None:
            # Lazy import keeps the SDK off the import path of mock-only setups.
            from prescription_reader.analyzers.transport_gemini import GeminiTransport

            transport = GeminiTransport(config)
        self._transport = transport

    @property
    def model_name(self) -> str:
        return getattr(self._transport, "model_name", self._config.model_id)

    @abstractmethod
    def build_request(self, image: EncodedImage) -> AnalysisRequest:
        ...

    @abstractmethod
    def decode(self, text: str) -> AnalysisResult:
        ...

    async def analyze(self, image: ImageBlob) -> AnalysisResult:
        try:
            return await self._analyze(image)
        except AnalysisError as e:
            ANALYSIS_REQUESTS_TOTAL.labels(mode=self.mode, result=e.code, model=self.model_name).inc()
            raise

    async def _analyze(self, image: ImageBlob) -> AnalysisResult:
        if not self._config.api_key:
            raise ConfigurationError("No API key configured for the hosted model")

        encoded = encode_image(image)
        request = self.build_request(encoded)

        t0 = time.perf_counter()
        try:
            text = await self._transport.generate(request)
        except AnalysisError:
            raise
        except Exception as e:
            logger.exception(
                "model_call_failed mode=%s model=%s media_type=%s",
                self.mode,
                self.model_name,
                encoded.media_type,
            )
            raise ModelCallError(f"{type(e).__name__}: {e}") from e
        duration_s = time.perf_counter() - t0

        MODEL_CALL_SECONDS.labels(mode=self.mode, model=self.model_name).observe(duration_s)

        result = self.decode(text)

        ANALYSIS_REQUESTS_TOTAL.labels(mode=self.mode, result="ok", model=self.model_name).inc()
        logger.info(
            "model_call_ok mode=%s model=%s duration_ms=%d media_type=%s bytes=%d",
            self.mode,
            self.model_name,
            int(duration_s * 1000),
            encoded.media_type,
            image.size,
        )
        return result


class TranscriptionAnalyzer(HostedImageAnalyzer):
    """Free-text mode: the model's reply is returned exactly as received."""

    mode = "text"

    def build_request(self, image: EncodedImage) -> AnalysisRequest:
        return build_transcription_request(image)

    def decode(self, text: str) -> str:
        return text


class PrescriptionAnalyzer(HostedImageAnalyzer):
    """Structured mode: the reply must be a JSON PrescriptionRecord."""

    mode = "structured"

    def build_request(self, image: EncodedImage) -> AnalysisRequest:
        return build_extraction_request(image)

    def decode(self, text: str) -> PrescriptionRecord:
        try:
            return parse_prescription_record(text)
        except AnalysisError:
            logger.warning(
                "model_reply_unparseable model=%s reply_len=%d",
                self.model_name,
                len(text or ""),
                exc_info=True,
            )
            raise
