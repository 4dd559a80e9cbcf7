from __future__ import annotations

import json

from pydantic import ValidationError

from prescription_reader.analyzers.errors import ResponseFormatError
from prescription_reader.analyzers.schema import PrescriptionRecord


def parse_prescription_record(text: str) -> PrescriptionRecord:
    """
    Decode a structured reply. The body is expected to be a bare JSON document
    (the request pins response_mime_type), so only surrounding whitespace is trimmed.
    """
    raw = (text or "").strip()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(f"Invalid JSON: {e}") from e

    try:
        return PrescriptionRecord.model_validate(data)
    except ValidationError as e:
        raise ResponseFormatError(f"JSON does not match schema: {e}") from e
