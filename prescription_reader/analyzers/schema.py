from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MedicineRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None


class PrescriptionRecord(BaseModel):
    """
    Structured extraction of one image.

    All three keys are required on the wire. For an image that is not a
    prescription the model leaves patientName empty, medicines empty and puts
    a description of the image in otherInfo.
    """
    model_config = ConfigDict(populate_by_name=True)

    patient_name: Optional[str] = Field(..., alias="patientName")
    medicines: List[MedicineRecord]
    other_info: Optional[str] = Field(..., alias="otherInfo")

    @property
    def is_prescription(self) -> bool:
        return bool(self.patient_name) or bool(self.medicines)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# Declarative schema sent with structured requests (Gemini OpenAPI subset).
PRESCRIPTION_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "patientName": {
            "type": "STRING",
            "description": "The full name of the patient. Should be an empty string if not found.",
        },
        "medicines": {
            "type": "ARRAY",
            "description": "A list of prescribed medications. An empty array if none are found.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING", "description": "The name of the medication."},
                    "dosage": {
                        "type": "STRING",
                        "description": "The dosage of the medication (e.g., '500mg').",
                    },
                    "frequency": {
                        "type": "STRING",
                        "description": "How often to take the medication (e.g., 'Twice a day').",
                    },
                    "quantity": {
                        "type": "STRING",
                        "description": "The total quantity of the medication prescribed.",
                    },
                    "notes": {
                        "type": "STRING",
                        "description": "Any other notes or instructions for this specific medication.",
                    },
                },
                "required": ["name"],
            },
        },
        "otherInfo": {
            "type": "STRING",
            "description": (
                "Any other transcribed text, general notes from the prescription, "
                "or a description of the image if it's not a prescription."
            ),
        },
    },
    "required": ["patientName", "medicines", "otherInfo"],
}
