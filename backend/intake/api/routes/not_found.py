"""API Fallback — any unmatched /api/* path is a JSON 404, never the static site."""

from fastapi import APIRouter, Depends, Request

from intake.api.dependencies import enforce_api_rate_limit
from intake.core.errors import EndpointNotFoundError

router = APIRouter(tags=["fallback"], dependencies=[Depends(enforce_api_rate_limit)])

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@router.api_route("/api/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
async def api_not_found(request: Request, path: str):
    raise EndpointNotFoundError(request.url.path)
