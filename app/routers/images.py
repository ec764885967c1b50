from fastapi import APIRouter, Depends
from fastapi.responses import Response
from app.core.errors import UpstreamFetchError
from app.services.images import ImageService, image_service
from app.services.translator import translate_error

router = APIRouter()

def get_image_service() -> ImageService:
    return image_service

@router.get("/{name}")
def get_image(name: str, service: ImageService = Depends(get_image_service)):
    """
    Proxy an image from the upstream image host.
    """
    try:
        content = service.fetch(name)
    except UpstreamFetchError as e:
        return translate_error(e, "image", "image")
    return Response(content=content, media_type="image/jpeg")
