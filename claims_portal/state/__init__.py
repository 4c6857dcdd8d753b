"""
State Layer - Portal View State

Defines the ephemeral, per-visitor state of the intake form.
"""

from claims_portal.state.models import (
    InvoicePreview,
    PortalSession,
    PortalStep,
    SidebarStep,
    SupportOption,
    Toast,
    WorkflowSnapshot,
)

__all__ = [
    "InvoicePreview",
    "PortalSession",
    "PortalStep",
    "SidebarStep",
    "SupportOption",
    "Toast",
    "WorkflowSnapshot",
]
