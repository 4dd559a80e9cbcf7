from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------
# Shared
# ---------

class ModelInfo(BaseModel):
    name: str
    provider: str


class MetaInfo(BaseModel):
    duration_ms: Optional[int] = None
    filename: Optional[str] = None
    media_type: Optional[str] = None
    size_bytes: Optional[int] = None


class AnalysisDetails(BaseModel):
    model_config = ConfigDict(extra="forbid")

    model: ModelInfo
    meta: Optional[MetaInfo] = None


# ---------
# Result pane views
# ---------

class CardRow(BaseModel):
    label: str
    value: str


class MedicineCard(BaseModel):
    title: str
    rows: List[CardRow] = Field(default_factory=list)


class TranscriptionView(BaseModel):
    kind: Literal["transcription"]
    title: str
    text: str


class DescriptionView(BaseModel):
    kind: Literal["description"]
    title: str
    text: str


class PrescriptionView(BaseModel):
    kind: Literal["prescription"]
    title: str
    patient_name: Optional[str] = None
    medicines: List[MedicineCard] = Field(default_factory=list)
    other_info: Optional[str] = None


ResultView = Union[TranscriptionView, DescriptionView, PrescriptionView]


# ---------
# Top-level response
# ---------

class AnalyzeImageResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: Literal["text", "structured"]
    # plain string in text mode, PrescriptionRecord (wire names) in structured mode
    result: Union[str, Dict[str, Any]]
    view: ResultView = Field(..., discriminator="kind")
    details: AnalysisDetails


# ---------
# Consistent error payload
# ---------

class ErrorBody(BaseModel):
    code: str
    message: str
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody
