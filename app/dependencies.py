from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from app.images.service import ImageService
    from app.plans.service import PlanService
    from app.speech.service import SpeechService


def get_plan_service(request: Request) -> "PlanService":
    return request.app.state.plan_service


def get_image_service(request: Request) -> "ImageService":
    return request.app.state.image_service


def get_speech_service(request: Request) -> "SpeechService":
    return request.app.state.speech_service
