"""Redirect route implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from ..request_utils import visit_metadata

router = APIRouter()


@router.get(
    "/{shortcode}",
    include_in_schema=False,
    responses={
        302: {"description": "Redirect to the original URL"},
        404: {"description": "Short code not found"},
        410: {"description": "Short code expired"},
    },
)
async def redirect_to_url(request: Request, shortcode: str):
    """Redirect to the original URL, counting the visit."""
    service = request.app.state.service

    original_url = await service.redirect(shortcode, **visit_metadata(request))

    # Temporary redirect so every visit reaches us and is counted
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
