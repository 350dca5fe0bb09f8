"""Plain-text and redirect routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from shortener.errors import GoneError, NotFoundError, StorageError
from shortener.common.url_builder import build_short_url
from shortener.shortcode import ShortCodeGenerator

router = APIRouter()


@router.post("/", response_class=PlainTextResponse, include_in_schema=False)
async def shorten_url_text(request: Request):
    """Shorten the URL sent as the raw request body."""
    service = request.app.state.service
    config = request.app.state.config
    
    original_url = (await request.body()).decode("utf-8", errors="replace").strip()
    
    try:
        short_code, duplicate = await service.create_short_url(
            original_url=original_url,
            user_id=request.state.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
    
    return PlainTextResponse(
        build_short_url(short_code, config.base_url),
        status_code=status.HTTP_409_CONFLICT if duplicate else status.HTTP_201_CREATED,
    )


@router.get("/ping", include_in_schema=False)
async def ping(request: Request):
    """Storage health check."""
    service = request.app.state.service
    
    if await service.health_check():
        return Response(status_code=status.HTTP_200_OK)
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    if not ShortCodeGenerator.is_valid_format(short_code):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Short code not found")

    try:
        original_url = await service.get_original_url(short_code)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
    
    return RedirectResponse(url=original_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
