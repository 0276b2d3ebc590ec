from typing import Optional

from pydantic import BaseModel, Field


class ImageCheckResult(BaseModel):
    """Verdict returned by the moderation model for one image."""

    is_work_appropriate: bool = Field(description="Whether or not the image is work-appropriate.")
    reason: Optional[str] = Field(
        default=None,
        description="The reason why the image is not work-appropriate, if applicable.",
    )
