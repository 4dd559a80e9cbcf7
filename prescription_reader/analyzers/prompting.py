from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from prescription_reader.analyzers.schema import PRESCRIPTION_RESPONSE_SCHEMA
from prescription_reader.encoding.image_encoder import EncodedImage

TRANSCRIPTION_INSTRUCTION = (
    "Analyze the attached image. "
    "If it is a medical prescription, transcribe it meticulously: for every medication "
    "give its name, dosage, frequency and quantity exactly as written, followed by any "
    "other instructions on the prescription. "
    "If it is not a prescription, describe the content of the image in detail."
)

EXTRACTION_INSTRUCTION = """Analyze the attached image.
If it's a medical prescription, extract the following information in the specified JSON format:
- The patient's full name.
- A list of all medications. For each medication, extract its name, dosage (e.g., "500mg"), frequency (e.g., "twice a day"), quantity, and any specific notes. Only include properties if the information is clearly present for that medication.
- Any other general notes or instructions from the prescription.

If the image is NOT a prescription, provide a general description of the image content in the 'otherInfo' field, leave patientName as an empty string, and medicines as an empty array."""


@dataclass(frozen=True)
class AnalysisRequest:
    """One submission to the hosted model. Built fresh per call."""
    image: EncodedImage
    instruction: str
    output_schema: Optional[Dict[str, Any]] = None

    @property
    def wants_json(self) -> bool:
        return self.output_schema is not None


def build_transcription_request(image: EncodedImage) -> AnalysisRequest:
    return AnalysisRequest(image=image, instruction=TRANSCRIPTION_INSTRUCTION)


def build_extraction_request(image: EncodedImage) -> AnalysisRequest:
    return AnalysisRequest(
        image=image,
        instruction=EXTRACTION_INSTRUCTION,
        output_schema=PRESCRIPTION_RESPONSE_SCHEMA,
    )
