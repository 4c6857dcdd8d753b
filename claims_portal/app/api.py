"""
Relay routes.

Two passthrough endpoints between the browser and the external workflow:
one opens a run on the fixed start webhook, the other forwards any later
step to the run's resume URL. Workflow payloads are returned as they come.
"""

import logging
from typing import Any, Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from ..config import settings
from ..webhook.decoding import parse_json
from ..webhook.exceptions import WebhookError
from ..webhook.interface import WorkflowGateway
from .dependencies import get_workflow_gateway
from .errors import RelayError
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post("/start-workflow")
async def start_workflow(
    request: Request,
    gateway: WorkflowGateway = Depends(get_workflow_gateway)
):
    """Triggers the workflow webhook. The reply normally carries a 'resumeUrl'."""
    payload = await _read_json(request)

    try:
        reply = await gateway.start_workflow(payload)
    except WebhookError:
        logger.exception("Start workflow error")
        raise RelayError(500, "Failed to start workflow")

    return JSONResponse(status_code=reply.status_code, content=reply.data)


@router.post("/resume-workflow")
async def resume_workflow(
    request: Request,
    resume_url: Optional[str] = Query(None, alias="resumeUrl"),
    gateway: WorkflowGateway = Depends(get_workflow_gateway)
):
    """
    Forwards the request body to the run's resume URL.

    Multipart uploads are streamed through with their original Content-Type
    (boundary included) and Content-Length; everything else is treated as JSON.
    """
    if not resume_url:
        raise RelayError(400, "resumeUrl is required")
    _check_resume_url(resume_url)

    logger.info(f"Resuming workflow at: {resume_url}")

    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" in content_type:
        call = gateway.resume_workflow_stream(
            resume_url,
            request.stream(),
            content_type,
            request.headers.get("content-length"),
        )
    else:
        payload = await _read_json(request)
        logger.debug(f"Request body: {payload}")
        call = gateway.resume_workflow(resume_url, payload)

    try:
        reply = await call
    except WebhookError:
        logger.exception("Resume workflow error")
        raise RelayError(500, "Failed to resume workflow")

    return JSONResponse(status_code=reply.status_code, content=reply.data)


async def _read_json(request: Request) -> Any:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return parse_json(body)
    except ValueError:
        raise RelayError(400, "Request body must be valid JSON")


def _check_resume_url(resume_url: str):
    try:
        url = httpx.URL(resume_url)
    except httpx.InvalidURL:
        raise RelayError(400, "resumeUrl must be an absolute http(s) URL")

    if url.scheme not in ("http", "https") or not url.host:
        raise RelayError(400, "resumeUrl must be an absolute http(s) URL")

    allowed = settings.RESUME_URL_ALLOWED_HOSTS
    if allowed and url.host not in allowed:
        logger.warning(f"Rejected resume URL host: {url.host}")
        raise RelayError(400, "resumeUrl host is not allowed")
