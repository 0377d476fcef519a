from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dependencies import get_image_service
from .schemas import GenerateImageRequest, GenerateImageResponse
from .service import ImageService

router = APIRouter(prefix="/api", tags=["images"])


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image(
    data: GenerateImageRequest,
    image_service: ImageService = Depends(get_image_service),
):
    """Картинка-заглушка для упражнения или блюда."""
    result = image_service.generate_image(data.prompt, data.type)

    # При сбое отдаём URL-заглушку, но со статусом 500.
    if result.degraded:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"imageUrl": result.value},
        )

    return GenerateImageResponse(image_url=result.value)
