"""
State Layer - Portal View State

This module defines the ephemeral view state of one portal visitor: which
screen they are on, what the external workflow has told us so far and what
they have selected. Nothing here is persisted; a session lives in memory
until the visitor starts over or the process exits.
"""

from enum import Enum
from typing import List, Optional, Literal
from pydantic import BaseModel, Field


class PortalStep(str, Enum):
    """
    The screens of the intake form, in the order a visitor walks them.
    """
    INITIAL = "initial"
    UPLOAD = "upload"
    SELECTION = "selection"
    ISSUES = "issues"
    RESOLUTION = "resolution"

    @property
    def position(self) -> int:
        return list(PortalStep).index(self)


SupportType = Literal["general", "troubleshooting", "warranty"]
StepStatus = Literal["pending", "active", "completed"]


class SupportOption(BaseModel):
    id: SupportType
    label: str
    description: str


class SidebarStep(BaseModel):
    """A row of the 'Claim Status' sidebar."""
    id: str
    label: str
    description: str
    status: StepStatus


class Toast(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class WorkflowSnapshot(BaseModel):
    """
    What the external workflow returns after reading the invoice.

    The field names follow the workflow's JSON, hence 'resumeUrl'.
    """
    summary: str
    products: str
    resumeUrl: str

    @property
    def product_list(self) -> List[str]:
        # The workflow sends products as one comma separated string
        return [p.strip() for p in self.products.split(",") if p.strip()]


RASTER_IMAGE_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp"}


class InvoicePreview(BaseModel):
    filename: str
    content_type: str
    content: bytes

    @property
    def media_type(self) -> str:
        return self.content_type.split(";")[0].strip().lower()

    @property
    def is_image(self) -> bool:
        return self.media_type in RASTER_IMAGE_TYPES

    @property
    def is_inline_safe(self) -> bool:
        # Anything else (html, svg, ...) could run script on our origin
        return self.is_image or self.media_type == "application/pdf"


class PortalSession(BaseModel):
    """
    The full view state for a single portal visitor.
    """
    session_id: str
    current_step: PortalStep = PortalStep.INITIAL
    completed: bool = False

    resume_url: Optional[str] = None
    workflow: Optional[WorkflowSnapshot] = None
    invoice: Optional[InvoicePreview] = None

    selected_products: List[str] = Field(default_factory=list)
    selected_support_type: Optional[SupportType] = None
    selected_issues: List[str] = Field(default_factory=list)
    email: str = ""

    # Text returned by the workflow after the final submission
    final_message: Optional[str] = None

    toasts: List[Toast] = Field(default_factory=list)

    def notify(self, title: str, description: str, destructive: bool = False):
        self.toasts.append(
            Toast(
                title=title,
                description=description,
                variant="destructive" if destructive else "default",
            )
        )

    def pop_toasts(self) -> List[Toast]:
        toasts, self.toasts = self.toasts, []
        return toasts
