"""
Customer Claims Portal

A multi-step claims intake form in front of an external workflow-automation
webhook. The portal collects an invoice, the affected products, the issues
and a contact email; the external workflow does all claim processing.
"""

from claims_portal.state import (
    InvoicePreview,
    PortalSession,
    PortalStep,
    SidebarStep,
    SupportOption,
    Toast,
    WorkflowSnapshot,
)
from claims_portal.webhook import (
    OutgoingFile,
    UpstreamReply,
    WebhookError,
    WorkflowGateway,
)
from claims_portal.services.portal import PortalService

__all__ = [
    # State Layer
    "InvoicePreview",
    "PortalSession",
    "PortalStep",
    "SidebarStep",
    "SupportOption",
    "Toast",
    "WorkflowSnapshot",
    # Webhook Layer
    "OutgoingFile",
    "UpstreamReply",
    "WebhookError",
    "WorkflowGateway",
    # Service Layer
    "PortalService",
]
