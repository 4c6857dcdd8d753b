"""
Webhook Layer - External Workflow Gateway

Everything that talks HTTP to the workflow-automation platform lives here.
"""

from claims_portal.webhook.exceptions import WebhookError
from claims_portal.webhook.interface import (
    OutgoingFile,
    UpstreamReply,
    WorkflowGateway,
)

__all__ = [
    "OutgoingFile",
    "UpstreamReply",
    "WebhookError",
    "WorkflowGateway",
]
