from typing import Literal, Optional

from app.ai.schemas import CamelModel

ImageType = Literal["exercise", "food", "generic"]


class GenerateImageRequest(CamelModel):
    prompt: Optional[str] = None
    type: Optional[ImageType] = None


class GenerateImageResponse(CamelModel):
    image_url: str
