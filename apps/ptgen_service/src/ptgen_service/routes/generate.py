"""The single public endpoint: generation, search and the index page.

Every JSON answer is wrapped in the public envelope. Successful answers are
written to the response cache under the request method and full URL; failed
ones, including internal faults, never are.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from http_cache.response_cache import ResponseCache
from ptgen import generate, search
from ptgen.exceptions import RequestError

from ..dependencies import get_response_cache
from ..envelope import debug_payload, internal_error_message, make_envelope
from ..index_page import INDEX_HTML

logger = logging.getLogger(__name__)

router = APIRouter()


async def dispatch(request: Request) -> dict[str, Any]:
    """Route one request to search or generation and build its envelope.

    Raises:
        RequestError: The request cannot be dispatched; the message is public.
    """
    params = request.query_params
    query = params.get("search")
    if query:
        results = await search(query, params.get("source") or "douban")
        return make_envelope(
            {"success": True, "data": [item.to_dict() for item in results]}
        )

    record = await generate(
        url=params.get("url"), site=params.get("site"), sid=params.get("sid")
    )
    return make_envelope(record.to_dict())


@router.api_route("/", methods=["GET", "HEAD"], response_model=None)
async def handle(
    request: Request,
    cache: ResponseCache = Depends(get_response_cache),
) -> Response:
    """Serve the index page, a cached answer or a freshly generated one."""
    if not request.query_params:
        return HTMLResponse(INDEX_HTML)

    method = request.method
    cache_url = str(request.url)
    cached = await cache.get(method, cache_url)
    if cached is not None:
        return JSONResponse(cached)

    try:
        body = await dispatch(request)
    except RequestError as e:
        return JSONResponse(make_envelope({"error": str(e)}))
    except Exception as e:
        logger.exception(f"Internal error while handling {cache_url}")
        error: dict[str, Any] = {"error": internal_error_message(e)}
        if request.query_params.get("debug") == "1":
            error["debug"] = debug_payload(e, request)
        return JSONResponse(make_envelope(error))

    if body.get("success"):
        await cache.set(method, cache_url, body)
    return JSONResponse(body)


@router.options("/")
async def options() -> Response:
    """Answer plain OPTIONS requests; CORS preflights never reach this handler."""
    return Response(headers={"Allow": "GET, HEAD, OPTIONS"})
