"""API routes implementation."""

from typing import List

from fastapi import APIRouter, Body, Request, Response, HTTPException, status

from shortener.errors import StorageError
from shortener.common.url_builder import build_short_url
from .schemas import (
    ShortenRequest,
    ShortenResponse,
    BatchShortenItem,
    BatchShortenResult,
    UserURLResponse,
    ErrorResponse,
)

router = APIRouter()


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        409: {"model": ErrorResponse, "description": "URL already shortened"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
)
async def shorten_url(request: Request, response: Response, body: ShortenRequest):
    """Create a shortened URL owned by the caller."""
    service = request.app.state.service
    config = request.app.state.config
    
    try:
        short_code, duplicate = await service.create_short_url(
            original_url=body.url,
            user_id=request.state.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
    
    if duplicate:
        response.status_code = status.HTTP_409_CONFLICT
    
    return ShortenResponse(result=build_short_url(short_code, config.base_url))


@router.post(
    "/shorten/batch",
    response_model=List[BatchShortenResult],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL in batch"},
        409: {"model": ErrorResponse, "description": "Some URLs were already shortened"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URLs in bulk",
)
async def shorten_batch(request: Request, response: Response, items: List[BatchShortenItem]):
    """Create many short URLs at once; collided items still get their short URL."""
    service = request.app.state.service
    config = request.app.state.config
    
    try:
        result = await service.create_short_urls(
            [(item.correlation_id, item.original_url) for item in items],
            user_id=request.state.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
    
    if result.duplicate:
        response.status_code = status.HTTP_409_CONFLICT
    
    return [
        BatchShortenResult(
            correlation_id=correlation_id,
            short_url=build_short_url(short_code, config.base_url),
        )
        for correlation_id, short_code in result.short_codes.items()
    ]


@router.get(
    "/user/urls",
    response_model=List[UserURLResponse],
    responses={204: {"description": "The caller has no links"}},
    summary="List the caller's links",
)
async def list_user_urls(request: Request):
    """List the active links created by the caller."""
    service = request.app.state.service
    config = request.app.state.config
    
    try:
        urls = await service.list_user_urls(request.state.user_id)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
    
    if not urls:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    
    return [
        UserURLResponse(
            short_url=build_short_url(url["short_code"], config.base_url),
            original_url=url["original_url"],
        )
        for url in urls
    ]


@router.delete(
    "/user/urls",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Delete the caller's links",
)
async def delete_user_urls(request: Request, short_codes: List[str] = Body(...)):
    """Schedule deletion of the given short codes; returns before it is applied."""
    service = request.app.state.service
    
    service.delete_urls(request.state.user_id, short_codes)
    
    return Response(status_code=status.HTTP_202_ACCEPTED)
