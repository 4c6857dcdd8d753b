"""
Dependency Injection Wiring (Composition Root).

Instantiates the gateway to the external workflow, the in-memory session
store and the portal service once per process. Tests replace the gateway
through app.dependency_overrides.
"""

from functools import lru_cache
from fastapi import Depends

from ..config import settings
from ..webhook.interface import WorkflowGateway
from ..webhook.adapters.httpx_adapter import HttpWorkflowGateway
from ..repositories.session import PortalSessionRepository, InMemoryPortalSessionRepository
from ..services.portal import PortalService

# Workflow Gateway (Singleton)
@lru_cache()
def get_workflow_gateway() -> WorkflowGateway:
    return HttpWorkflowGateway(
        start_url=settings.START_WEBHOOK_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )

# Session Repository (Singleton)
# Note: In-memory storage must be a singleton so data persists across requests!
@lru_cache()
def get_session_repository() -> PortalSessionRepository:
    return InMemoryPortalSessionRepository()

# The Portal Service
def get_portal_service(
    gateway: WorkflowGateway = Depends(get_workflow_gateway)
) -> PortalService:
    return PortalService(gateway=gateway)
