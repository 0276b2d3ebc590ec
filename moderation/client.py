import logging
from typing import Any, Mapping

from langchain_core.runnables import Runnable

from moderation.data_uri import decode_data_uri
from moderation.schemas import ImageCheckResult

logger = logging.getLogger(__name__)

NO_IMAGE_REASON = "No image data provided."
ERROR_REASON = "An error occurred while analyzing the image."


class ModerationClient:
    """
    Asks the moderation model whether an image is work-appropriate.

    The model is the only source of truth; there is no local fallback. Every
    call resolves to an ImageCheckResult, failures included, and nothing is
    retried or cached.
    """

    def __init__(self, classifier: Runnable):
        self.classifier = classifier

    async def check_image(self, photo_data_uri: str) -> ImageCheckResult:
        if not photo_data_uri:
            return ImageCheckResult(is_work_appropriate=False, reason=NO_IMAGE_REASON)

        try:
            mime_type, data = decode_data_uri(photo_data_uri)
            logger.debug("Classifying %s image (%d bytes)", mime_type, len(data))
            output = await self.classifier.ainvoke({"photo_data_uri": photo_data_uri})
            return self._coerce(output)
        except Exception:
            logger.exception("Error checking image")
            return ImageCheckResult(is_work_appropriate=False, reason=ERROR_REASON)

    @staticmethod
    def _coerce(output: Any) -> ImageCheckResult:
        if output is None:
            raise ValueError("Moderation model returned no structured output")
        if isinstance(output, ImageCheckResult):
            return output
        if isinstance(output, Mapping):
            return ImageCheckResult.model_validate(dict(output))
        raise TypeError(f"Unexpected moderation output: {type(output).__name__}")
