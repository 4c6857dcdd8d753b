import inspect
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ..app.dependencies import get_portal_service, get_session_repository
from ..config import settings
from ..data.catalog import ISSUES, SUPPORT_TYPES, TROUBLESHOOTING_GUIDANCE
from ..repositories.session import PortalSessionRepository
from ..services.exceptions import PortalStateError
from ..services.portal import PortalService, sidebar_steps
from ..state.models import PortalSession
from ..webhook.interface import OutgoingFile
from .loader import template_file, templates
from .templates import Template

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def portal_page(
    request: Request,
    repo: PortalSessionRepository = Depends(get_session_repository)
):
    """Renders the screen the visitor is on, creating a session on first visit."""
    session = _current_session(request, repo)
    is_new = session is None
    if is_new:
        session = repo.create()

    toasts = session.pop_toasts()
    repo.save(session)

    context = {
        "session": session,
        "step": session.current_step.value,
        "sidebar": sidebar_steps(session),
        "toasts": toasts,
        "products": session.workflow.product_list if session.workflow else [],
        "support_types": SUPPORT_TYPES,
        "issues": ISSUES,
        "guidance": TROUBLESHOOTING_GUIDANCE,
    }
    response = templates.TemplateResponse(
        request=request, name=template_file(Template.PORTAL), context=context
    )
    if is_new:
        response.set_cookie(
            settings.SESSION_COOKIE_NAME, session.session_id, httponly=True, samesite="lax"
        )
    return response


@router.post("/portal/start")
async def start(
    request: Request,
    repo: PortalSessionRepository = Depends(get_session_repository),
    service: PortalService = Depends(get_portal_service)
):
    return await _apply(request, repo, service.start)


@router.post("/portal/upload")
async def upload(
    request: Request,
    files: Optional[List[UploadFile]] = File(None),
    repo: PortalSessionRepository = Depends(get_session_repository),
    service: PortalService = Depends(get_portal_service)
):
    outgoing = []
    for upload_file in files or []:
        # Browsers send an empty part when nothing was chosen
        if not upload_file.filename:
            continue
        outgoing.append(
            OutgoingFile(
                filename=upload_file.filename,
                content=await upload_file.read(),
                content_type=upload_file.content_type or "application/octet-stream",
            )
        )
    return await _apply(request, repo, service.upload, outgoing)


@router.post("/portal/selection")
async def select(
    request: Request,
    products: List[str] = Form([]),
    support_type: Optional[str] = Form(None),
    repo: PortalSessionRepository = Depends(get_session_repository),
    service: PortalService = Depends(get_portal_service)
):
    return await _apply(request, repo, service.select, products, support_type)


@router.post("/portal/issues")
async def describe_issues(
    request: Request,
    issues: List[str] = Form([]),
    repo: PortalSessionRepository = Depends(get_session_repository),
    service: PortalService = Depends(get_portal_service)
):
    return await _apply(request, repo, service.describe_issues, issues)


@router.post("/portal/email")
async def submit_email(
    request: Request,
    email: str = Form(""),
    repo: PortalSessionRepository = Depends(get_session_repository),
    service: PortalService = Depends(get_portal_service)
):
    return await _apply(request, repo, service.submit_email, email)


@router.post("/portal/reset")
async def reset(
    request: Request,
    repo: PortalSessionRepository = Depends(get_session_repository)
):
    """Drops the visitor's state. The next page view starts a fresh session."""
    session = _current_session(request, repo)
    if session:
        repo.delete(session.session_id)
    response = _redirect()
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/portal/invoice-preview")
async def invoice_preview(
    request: Request,
    repo: PortalSessionRepository = Depends(get_session_repository)
):
    session = _current_session(request, repo)
    if not session or not session.invoice:
        raise HTTPException(status_code=404, detail="No invoice uploaded")
    invoice = session.invoice
    headers = {"X-Content-Type-Options": "nosniff"}
    if invoice.is_inline_safe:
        media_type = invoice.media_type
    else:
        media_type = "application/octet-stream"
        headers["Content-Disposition"] = _attachment(invoice.filename)
    return Response(content=invoice.content, media_type=media_type, headers=headers)


# --- Helpers ---

def _current_session(
    request: Request, repo: PortalSessionRepository
) -> Optional[PortalSession]:
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not session_id:
        return None
    return repo.get(session_id)


def _attachment(filename: str) -> str:
    # Header values must stay latin-1; the name is only a download hint
    safe = "".join(c for c in filename if c.isascii() and c.isprintable() and c not in '"\\')
    return f'attachment; filename="{safe or "invoice"}"'


def _redirect() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


async def _apply(request: Request, repo: PortalSessionRepository, action, *args):
    """
    Runs a PortalService operation against the visitor's session and sends
    them back to the page (Post/Redirect/Get).
    """
    session = _current_session(request, repo)
    if session is None:
        return _redirect()

    try:
        result = action(session, *args)
        if inspect.isawaitable(result):
            await result
    except PortalStateError as e:
        logger.info(f"Session {session.session_id}: {e}")
        session.notify(
            "Step not available",
            "Please continue from the current step.",
            destructive=True,
        )

    repo.save(session)
    return _redirect()
