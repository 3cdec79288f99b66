from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import UJSONResponse
from loguru import logger

from germanwiki.scraper import PageResolver
from germanwiki.shared import UpstreamUnavailable, format_upstream_error
from germanwiki.shared.services import get_resolver

from .models import SearchResponse

router = APIRouter(
    prefix="/german",
    tags=["German Wiktionary"],
)


def failure(exc: Exception, message: str) -> UJSONResponse:
    if isinstance(exc, UpstreamUnavailable):
        logger.error("{} ({!r})", message, exc)
    else:
        logger.opt(exception=exc).error(message)

    status, body = format_upstream_error(exc, message)
    return UJSONResponse(body, status_code=status)


@router.get("/search", include_in_schema=False)
@router.get("/search/", include_in_schema=False)
@router.get("/search/{word}", response_model=SearchResponse)
async def german_search(
    request: Request,
    word: str = "",
    resolver: PageResolver = Depends(get_resolver),
):
    """Find candidate entry pages for a word by title prefix."""

    if not word.strip():
        return UJSONResponse({"pages": []}, status_code=404)

    try:
        pages = await resolver.find_candidate_pages(word)
    except Exception as exc:
        return failure(exc, "Failed to load German Wiki search results")

    return UJSONResponse(SearchResponse(pages=pages).model_dump(exclude_none=True))


@router.get("/page", include_in_schema=False)
@router.get("/page/", include_in_schema=False)
@router.get("/page/{page_id}")
async def german_page(
    request: Request,
    page_id: Optional[int] = None,
    resolver: PageResolver = Depends(get_resolver),
):
    """Fetch an entry page and return its normalized lexical record."""

    if page_id is None:
        return UJSONResponse({}, status_code=404)

    try:
        entry = await resolver.load_entry(page_id)
    except Exception as exc:
        return failure(exc, "Failed to load German Wiki page data")

    if entry.diagnostics:
        logger.warning(
            "Page {} was assembled without {} section(s): {}",
            page_id,
            len(entry.diagnostics),
            entry.diagnostics,
        )

    return UJSONResponse(entry.payload())
