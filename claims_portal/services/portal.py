"""
Portal Service - Intake Form State Machine

This service drives a visitor through the intake screens:

    initial -> upload -> selection -> issues -> resolution

Each operation validates the visitor's input, talks to the external workflow
when the screen requires it, moves the session pointer forward and queues the
toast the visitor should see next. Validation problems never raise; they end
up as destructive toasts and leave the visitor on the same screen. Only an
action that does not belong to the current screen raises PortalStateError.
"""

import logging
from typing import List, Optional

from ..data.catalog import ISSUES, WORKFLOW_STEPS, support_type_ids
from ..state.models import (
    InvoicePreview,
    PortalSession,
    PortalStep,
    SidebarStep,
    WorkflowSnapshot,
)
from ..webhook.exceptions import WebhookError
from ..webhook.interface import OutgoingFile, WorkflowGateway
from .exceptions import PortalStateError

logger = logging.getLogger(__name__)


def sidebar_steps(session: PortalSession) -> List[SidebarStep]:
    """
    Derives the 'Claim Status' sidebar from the session pointer.
    """
    current = session.current_step
    rows = []
    for idx, (step_id, label, description) in enumerate(WORKFLOW_STEPS):
        if session.completed:
            status = "completed"
        elif current == PortalStep.INITIAL:
            status = "pending"
        elif idx < current.position:
            status = "completed"
        elif idx == current.position:
            status = "active"
        else:
            status = "pending"
        rows.append(
            SidebarStep(id=step_id, label=label, description=description, status=status)
        )
    return rows


class PortalService:
    def __init__(self, gateway: WorkflowGateway):
        self.gateway = gateway

    async def start(self, session: PortalSession):
        """Opens a new workflow run and moves to the upload screen."""
        self._require_step(session, PortalStep.INITIAL)

        try:
            reply = await self.gateway.start_workflow({})
        except WebhookError as e:
            logger.warning(f"Starting workflow failed: {e}")
            session.notify("Error", "Failed to start workflow", destructive=True)
            return

        if not reply.ok:
            session.notify("Error", "Failed to start workflow", destructive=True)
            return

        resume_url = reply.data.get("resumeUrl") if isinstance(reply.data, dict) else None
        if not resume_url:
            session.notify("Error", "No resume URL received", destructive=True)
            return

        session.resume_url = resume_url
        session.current_step = PortalStep.UPLOAD
        logger.info(f"Session {session.session_id} started workflow")

    async def upload(self, session: PortalSession, files: List[OutgoingFile]):
        """
        Sends the invoice files to the workflow, which answers with a summary,
        the products it found and the next resume URL.
        """
        self._require_step(session, PortalStep.UPLOAD)

        if not files:
            session.notify(
                "No files selected",
                "Please select at least one file to upload.",
                destructive=True,
            )
            return

        first = files[0]
        session.invoice = InvoicePreview(
            filename=first.filename,
            content_type=first.content_type,
            content=first.content,
        )

        try:
            reply = await self.gateway.resume_workflow_files(session.resume_url, files)
            snapshot = self._parse_snapshot(reply.data)
        except WebhookError as e:
            logger.warning(f"Invoice upload failed for session {session.session_id}: {e}")
            snapshot = None

        if snapshot is None:
            session.notify("Error", "Failed to upload files. Please try again.", destructive=True)
            return

        session.workflow = snapshot
        session.resume_url = snapshot.resumeUrl
        session.current_step = PortalStep.SELECTION
        session.notify("Files processed successfully", "Please select products to continue")

    def select(
        self,
        session: PortalSession,
        products: List[str],
        support_type: Optional[str],
    ):
        self._require_step(session, PortalStep.SELECTION)

        offered = session.workflow.product_list if session.workflow else []
        chosen = [p for p in _unique(products) if p in offered]

        if not chosen:
            session.notify(
                "No products selected",
                "Please select at least one product",
                destructive=True,
            )
            return
        if support_type not in support_type_ids():
            session.notify(
                "No support type selected",
                "Please select a type of support needed",
                destructive=True,
            )
            return

        session.selected_products = chosen
        session.selected_support_type = support_type
        session.current_step = PortalStep.ISSUES

    def describe_issues(self, session: PortalSession, issues: List[str]):
        self._require_step(session, PortalStep.ISSUES)

        chosen = [i for i in _unique(issues) if i in ISSUES]
        if not chosen:
            session.notify(
                "No issues selected",
                "Please select at least one issue",
                destructive=True,
            )
            return

        session.selected_issues = chosen
        session.current_step = PortalStep.RESOLUTION

    async def submit_email(self, session: PortalSession, email: str):
        """Hands the collected answers back to the workflow and finishes the claim."""
        self._require_step(session, PortalStep.RESOLUTION)

        email = (email or "").strip()
        if not email:
            session.notify(
                "Email required",
                "Please enter your email address",
                destructive=True,
            )
            return

        session.email = email
        payload = {
            "selectedProducts": session.selected_products,
            "supportType": session.selected_support_type,
            "selectedIssues": session.selected_issues,
            "email": email,
        }

        try:
            reply = await self.gateway.resume_workflow(session.resume_url, payload)
        except WebhookError as e:
            logger.warning(f"Final submission failed for session {session.session_id}: {e}")
            session.notify("Error", "Failed to submit. Please try again.", destructive=True)
            return

        data = reply.data[0] if isinstance(reply.data, list) and reply.data else reply.data
        if isinstance(data, dict) and isinstance(data.get("message"), str):
            session.final_message = data["message"]

        session.completed = True
        session.notify("Updates sent successfully", "We'll send you updates via email")

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _require_step(self, session: PortalSession, expected: PortalStep):
        if session.completed or session.current_step != expected:
            raise PortalStateError(
                f"Action for '{expected.value}' not allowed on '{session.current_step.value}'"
            )

    def _parse_snapshot(self, data) -> Optional[WorkflowSnapshot]:
        # n8n wraps 'Respond to Webhook' items in a list
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            return None
        if not (data.get("summary") and data.get("products") and data.get("resumeUrl")):
            return None
        return WorkflowSnapshot(
            summary=str(data["summary"]),
            products=str(data["products"]),
            resumeUrl=str(data["resumeUrl"]),
        )


def _unique(values: List[str]) -> List[str]:
    seen = []
    for v in values:
        v = v.strip()
        if v and v not in seen:
            seen.append(v)
    return seen
