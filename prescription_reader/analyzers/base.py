from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Union

from prescription_reader.analyzers.prompting import AnalysisRequest
from prescription_reader.analyzers.schema import PrescriptionRecord
from prescription_reader.encoding.image_encoder import ImageBlob

DEFAULT_MODEL_ID = "gemini-2.5-pro"

# Free-text mode yields the model's text, structured mode a parsed record.
AnalysisResult = Union[str, PrescriptionRecord]


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Explicit configuration handed to an analyzer at construction.

    api_key may be None here; analyzers check it on every call so that a missing
    credential fails the analysis itself, before any network activity.
    """
    api_key: Optional[str]
    model_id: str = DEFAULT_MODEL_ID


class ModelTransport(Protocol):
    """One round trip to a hosted multimodal model. Returns the reply text."""

    @property
    def model_name(self) -> str:
        ...

    async def generate(self, request: AnalysisRequest) -> str:
        ...


class ImageAnalyzer(Protocol):
    mode: str

    async def analyze(self, image: ImageBlob) -> AnalysisResult:
        ...
