"""The same-origin Token API proxy endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger

from config.settings import settings
from token_explorer.api.app import limiter
from token_explorer.api.dependencies import get_forwarder
from token_explorer.proxy.forwarder import ProxyForwarder, split_params
from token_explorer.token_api.exceptions import InvalidRequest

router = APIRouter(tags=["proxy"])


@router.get(settings.proxy_route)
@limiter.limit(settings.proxy_rate_limit)
async def token_proxy(
    request: Request,
    forwarder: ProxyForwarder = Depends(get_forwarder),
) -> JSONResponse:
    """Forward ``?path=`` plus every other query parameter to the upstream API."""
    path, params = split_params(request.query_params.multi_items())
    try:
        result = await forwarder.forward(path, params)
    except InvalidRequest as e:
        logger.warning(f"[PROXY] Rejected request: {e}")
        return JSONResponse({"error": str(e)}, status_code=400)
    return JSONResponse(result.body, status_code=result.status_code)
