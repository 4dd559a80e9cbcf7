"""
Presentation state for one analysis screen.

The screen is always in exactly one of four states, so combinations such as
"loading and failed" cannot be represented.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from prescription_reader.analyzers.base import AnalysisResult, ImageAnalyzer
from prescription_reader.analyzers.errors import AnalysisError
from prescription_reader.encoding.image_encoder import ImageBlob

logger = logging.getLogger(__name__)

MSG_NO_IMAGE = "Please upload an image first."


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Failed:
    message: str
    error: Optional[AnalysisError] = None


@dataclass(frozen=True)
class Succeeded:
    result: AnalysisResult


AnalysisState = Union[Idle, Loading, Failed, Succeeded]


class SubmissionInProgressError(RuntimeError):
    """Raised when submit() is called while an analysis is still running."""


class AnalysisSession:
    """
    Drives one upload/preview/submit screen.

    Holds the selected file and the current state. Only one analysis may be
    in flight; submitting again while loading is refused rather than cancelling.
    """

    def __init__(self, analyzer: ImageAnalyzer):
        self._analyzer = analyzer
        self._image: Optional[ImageBlob] = None
        self.state: AnalysisState = Idle()

    @property
    def image(self) -> Optional[ImageBlob]:
        return self._image

    @property
    def can_submit(self) -> bool:
        return not isinstance(self.state, Loading)

    def select(self, image: ImageBlob) -> None:
        if isinstance(self.state, Loading):
            raise SubmissionInProgressError("Cannot change the image while an analysis is running")
        self._image = image
        self.state = Idle()

    async def submit(self) -> AnalysisState:
        if not self.can_submit:
            raise SubmissionInProgressError("An analysis is already running")

        if self._image is None:
            self.state = Failed(message=MSG_NO_IMAGE)
            return self.state

        self.state = Loading()
        try:
            result = await self._analyzer.analyze(self._image)
        except AnalysisError as e:
            logger.info("analysis_failed code=%s", e.code)
            self.state = Failed(message=f"An error occurred: {e.user_message}", error=e)
        except BaseException:
            # never leave the screen stuck in Loading
            self.state = Idle()
            raise
        else:
            self.state = Succeeded(result=result)
        return self.state
