import json

import httpx
import pytest
from fastapi.testclient import TestClient

from claims_portal.app.dependencies import get_session_repository, get_workflow_gateway
from claims_portal.app.main import app
from claims_portal.config import settings
from claims_portal.data.catalog import ISSUES
from claims_portal.repositories.session import InMemoryPortalSessionRepository


def _workflow(request: httpx.Request) -> httpx.Response:
    """A three-call n8n run: start, invoice upload, final answers."""
    path = request.url.path
    if path == "/webhook/start":
        return httpx.Response(200, json={"resumeUrl": "https://workflow.test/resume/1"})
    if path == "/resume/1":
        return httpx.Response(200, json=[{
            "summary": "Invoice INV-77 from Gadget Store <b>paid</b>",
            "products": "MacBook Pro 14, Magic Mouse , ",
            "resumeUrl": "https://workflow.test/resume/2",
        }])
    if path == "/resume/2":
        return httpx.Response(200, text="Case 981 opened")
    return httpx.Response(404, json={"message": "unknown webhook"})


@pytest.fixture
def portal(client, upstream):
    upstream.respond = _workflow
    return client


def test_first_visit_sets_cookie_and_shows_start(portal):
    resp = portal.get("/")

    assert resp.status_code == 200
    assert settings.SESSION_COOKIE_NAME in resp.cookies
    assert "Initialize Your Claim" in resp.text
    assert 'action="/portal/start"' in resp.text


def test_full_claim_walkthrough(portal, upstream):
    portal.get("/")

    page = portal.post("/portal/start")
    assert "Upload Your Invoice" in page.text

    page = portal.post(
        "/portal/upload",
        files={"files": ("invoice.png", b"\x89PNG invoice", "image/png")},
    )
    assert "Files processed successfully" in page.text
    assert "MacBook Pro 14" in page.text
    assert "Magic Mouse" in page.text
    # Workflow text is escaped
    assert "&lt;b&gt;paid&lt;/b&gt;" in page.text
    assert b'filename="invoice.png"' in upstream.last.content

    preview = portal.get("/portal/invoice-preview")
    assert preview.status_code == 200
    assert preview.headers["content-type"] == "image/png"
    assert preview.content == b"\x89PNG invoice"

    page = portal.post(
        "/portal/selection",
        data={"products": ["MacBook Pro 14"], "support_type": "warranty"},
    )
    assert "Describe Your Issues" in page.text

    page = portal.post("/portal/issues", data={"issues": [ISSUES[0], ISSUES[4]]})
    assert "Troubleshooting Steps" in page.text

    page = portal.post("/portal/email", data={"email": "jane@example.com"})
    assert "Updates sent successfully" in page.text
    assert "Case 981 opened" in page.text

    assert str(upstream.last.url) == "https://workflow.test/resume/2"
    assert json.loads(upstream.last.content) == {
        "selectedProducts": ["MacBook Pro 14"],
        "supportType": "warranty",
        "selectedIssues": [ISSUES[0], ISSUES[4]],
        "email": "jane@example.com",
    }


def test_toasts_are_shown_once(portal):
    portal.get("/")
    portal.post("/portal/start")

    page = portal.post("/portal/upload")
    assert "No files selected" in page.text

    page = portal.get("/")
    assert "No files selected" not in page.text
    assert "Upload Your Invoice" in page.text


def test_out_of_order_post_shows_toast(portal, upstream):
    portal.get("/")

    page = portal.post("/portal/issues", data={"issues": [ISSUES[0]]})

    assert "Step not available" in page.text
    assert "Initialize Your Claim" in page.text
    assert upstream.requests == []


def test_selection_validation_keeps_screen(portal):
    portal.get("/")
    portal.post("/portal/start")
    portal.post("/portal/upload", files={"files": ("invoice.png", b"PNG", "image/png")})

    page = portal.post("/portal/selection", data={"support_type": "general"})

    assert "No products selected" in page.text
    assert "Products from your invoice" in page.text


def test_start_failure_shows_error(portal, upstream):
    upstream.respond = lambda r: httpx.Response(200, json={"status": "queued"})
    portal.get("/")

    page = portal.post("/portal/start")

    assert "No resume URL received" in page.text
    assert "Initialize Your Claim" in page.text


def test_reset_starts_a_new_session(portal):
    portal.get("/")
    portal.post("/portal/start")

    page = portal.post("/portal/reset")

    assert "Initialize Your Claim" in page.text


def test_invoice_preview_missing(portal):
    portal.get("/")

    assert portal.get("/portal/invoice-preview").status_code == 404


def test_cookieless_page_views_do_not_grow_store_without_bound(gateway):
    repo = InMemoryPortalSessionRepository(max_sessions=3)
    app.dependency_overrides[get_workflow_gateway] = lambda: gateway
    app.dependency_overrides[get_session_repository] = lambda: repo
    try:
        with TestClient(app) as crawler:
            for _ in range(10):
                crawler.cookies.clear()
                assert crawler.get("/").status_code == 200
    finally:
        app.dependency_overrides.clear()

    assert len(repo) == 3


def test_html_upload_is_served_as_download(portal):
    portal.get("/")
    portal.post("/portal/start")
    portal.post(
        "/portal/upload",
        files={"files": ("invoice.html", b"<script>alert(1)</script>", "text/html")},
    )

    preview = portal.get("/portal/invoice-preview")

    assert preview.status_code == 200
    assert preview.headers["content-type"] == "application/octet-stream"
    assert preview.headers["content-disposition"] == 'attachment; filename="invoice.html"'
    assert preview.headers["x-content-type-options"] == "nosniff"


def test_pdf_upload_is_served_inline(portal):
    portal.get("/")
    portal.post("/portal/start")
    portal.post(
        "/portal/upload",
        files={"files": ("invoice.pdf", b"%PDF-1.4", "application/pdf")},
    )

    preview = portal.get("/portal/invoice-preview")

    assert preview.headers["content-type"] == "application/pdf"
    assert "content-disposition" not in preview.headers
    assert preview.headers["x-content-type-options"] == "nosniff"
