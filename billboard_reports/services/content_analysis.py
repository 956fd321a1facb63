"""
Content analysis for submitted billboard photos.

The submission handler asks an analyzer for a short description of the
uploaded image and stores it as ``aiAnalysis``. Analyzers may fail by
raising ``ContentAnalysisError``; the handler then creates the report
without an annotation.

``CannedContentAnalyzer`` is a stand-in for a real vision integration: it
returns one of a few fixed descriptions. A production analyzer implements
the same ``analyze`` method.
"""

import logging
import random
from typing import Optional, Sequence

from billboard_reports.core.config import Settings
from billboard_reports.core.exceptions import ContentAnalysisError

logger = logging.getLogger(__name__)

CANNED_DESCRIPTIONS = (
    "Billboard contains commercial advertisement for consumer products",
    "Digital display showing promotional content",
    "Large format outdoor advertising sign",
    "Highway billboard with commercial messaging",
)


class ContentAnalyzer:
    """
    Describes the content of a billboard photo.
    """

    def analyze(self, content: bytes, content_type: str) -> Optional[str]:
        """
        Describe an image.

        Args:
            content: Raw image bytes.
            content_type: Declared MIME type of the image.

        Returns:
            Short description, or None when the analyzer has nothing to say.

        Raises:
            ContentAnalysisError: The image could not be analyzed.
        """
        raise NotImplementedError


class CannedContentAnalyzer(ContentAnalyzer):
    """Picks one of a fixed set of billboard descriptions."""

    def __init__(
        self,
        descriptions: Sequence[str] = CANNED_DESCRIPTIONS,
        rng: Optional[random.Random] = None,
    ):
        if not descriptions:
            raise ValueError("At least one canned description is required")
        self.descriptions = tuple(descriptions)
        self.rng = rng or random.Random()

    def analyze(self, content: bytes, content_type: str) -> Optional[str]:
        if not content:
            raise ContentAnalysisError("Cannot analyze an empty image")
        return self.rng.choice(self.descriptions)


class DisabledContentAnalyzer(ContentAnalyzer):
    """Leaves every report without an annotation."""

    def analyze(self, content: bytes, content_type: str) -> Optional[str]:
        return None


def build_content_analyzer(settings: Settings) -> ContentAnalyzer:
    if settings.CONTENT_ANALYSIS_ENABLED:
        return CannedContentAnalyzer()
    logger.info("Content analysis disabled")
    return DisabledContentAnalyzer()
