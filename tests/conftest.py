import httpx
import pytest
from fastapi.testclient import TestClient

from claims_portal.app.dependencies import get_session_repository, get_workflow_gateway
from claims_portal.app.main import app
from claims_portal.repositories.session import InMemoryPortalSessionRepository
from claims_portal.webhook.adapters.httpx_adapter import HttpWorkflowGateway

START_URL = "https://workflow.test/webhook/start"


class Upstream:
    """
    Stand-in for the workflow platform. Records every request and answers
    with whatever 'respond' returns.
    """

    def __init__(self):
        self.requests = []
        self.respond = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def gateway(upstream):
    return HttpWorkflowGateway(
        start_url=START_URL,
        timeout=5.0,
        transport=httpx.MockTransport(upstream),
    )


@pytest.fixture
def client(gateway):
    repo = InMemoryPortalSessionRepository()
    app.dependency_overrides[get_workflow_gateway] = lambda: gateway
    app.dependency_overrides[get_session_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
