from __future__ import annotations

import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from prescription_reader.analyzers.base import AnalyzerConfig
from prescription_reader.analyzers.prompting import AnalysisRequest

logger = logging.getLogger(__name__)


class GeminiTransport:
    """
    Sends an AnalysisRequest to Gemini's generateContent endpoint.

    The SDK client is created lazily from the config's api key, so constructing
    the transport never touches the network. Tests may inject `client`.
    """

    def __init__(self, config: AnalyzerConfig, client: Optional[Any] = None):
        self._config = config
        self._client = client

    @property
    def model_name(self) -> str:
        return self._config.model_id

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self._config.api_key)
        return self._client

    @staticmethod
    def build_contents(request: AnalysisRequest) -> list:
        image_part = types.Part.from_bytes(
            data=request.image.to_bytes(),
            mime_type=request.image.media_type,
        )
        text_part = types.Part.from_text(text=request.instruction)
        return [image_part, text_part]

    @staticmethod
    def build_config(request: AnalysisRequest) -> Optional[types.GenerateContentConfig]:
        if not request.wants_json:
            return None
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=request.output_schema,
        )

    async def generate(self, request: AnalysisRequest) -> str:
        client = self._get_client()
        response = await client.aio.models.generate_content(
            model=self._config.model_id,
            contents=self.build_contents(request),
            config=self.build_config(request),
        )

        text = response.text
        if text is None:
            # blocked prompt or empty candidate list
            raise RuntimeError("Gemini returned no text candidates")
        return text
