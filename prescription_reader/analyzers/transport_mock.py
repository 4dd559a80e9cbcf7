from __future__ import annotations

import json
from typing import List, Optional

from prescription_reader.analyzers.prompting import AnalysisRequest


class MockTransport:
    """
    Deterministic stand-in for the hosted model (dev mode and tests).

    Unless a canned `reply` is given, the answer depends only on the request,
    so repeated calls with the same image produce the same text.
    """

    def __init__(self, reply: Optional[str] = None):
        self.model_name = "mock-model"
        self._reply = reply
        self.requests: List[AnalysisRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def generate(self, request: AnalysisRequest) -> str:
        self.requests.append(request)
        if self._reply is not None:
            return self._reply

        description = (
            f"[MOCK] {request.image.media_type} image, "
            f"{len(request.image.data)} base64 characters. Replace with a real model provider."
        )
        if request.wants_json:
            return json.dumps({"patientName": "", "medicines": [], "otherInfo": description})
        return description
