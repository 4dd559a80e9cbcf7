from __future__ import annotations

from typing import Any, Dict, List

from prescription_reader.analyzers.base import AnalysisResult
from prescription_reader.analyzers.schema import MedicineRecord, PrescriptionRecord

MSG_NO_DESCRIPTION = "No detailed description was generated."

# Card rows in display order; empty values are not shown.
_MEDICINE_ROWS = (
    ("dosage", "Dosage"),
    ("frequency", "Frequency"),
    ("quantity", "Quantity"),
    ("notes", "Notes"),
)


def _medicine_card(medicine: MedicineRecord) -> Dict[str, Any]:
    rows: List[Dict[str, str]] = []
    for attr, label in _MEDICINE_ROWS:
        value = getattr(medicine, attr)
        if value:
            rows.append({"label": label, "value": value})
    return {"title": medicine.name, "rows": rows}


def build_result_view(result: AnalysisResult) -> Dict[str, Any]:
    """
    Turn an analysis result into what the result pane shows:
    - "transcription": free-text mode output
    - "description": structured output for an image that is not a prescription
    - "prescription": patient, one card per medicine, other notes
    """
    if isinstance(result, str):
        return {"kind": "transcription", "title": "Transcription", "text": result}

    record: PrescriptionRecord = result
    if not record.is_prescription:
        return {
            "kind": "description",
            "title": "Image Description",
            "text": record.other_info or MSG_NO_DESCRIPTION,
        }

    return {
        "kind": "prescription",
        "title": "Prescription Analysis",
        "patient_name": record.patient_name or None,
        "medicines": [_medicine_card(m) for m in record.medicines],
        "other_info": record.other_info or None,
    }
