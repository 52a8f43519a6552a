"""Pytest fixtures and configuration for Proposal Generator tests."""

import copy
import json
import os
import uuid
import pytest
from typing import Any, Dict, Generator, List, Optional

from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("ACCESS_PASSWORD", "test-password")
os.environ.setdefault("TOKEN_SECRET", "test-secret")
os.environ.setdefault("NOTION_API_KEY", "secret_test")
os.environ.setdefault("RENDER_MODE", "pdf")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("CREWAI_DISABLE_TELEMETRY", "true")
os.environ.setdefault("OTEL_SDK_DISABLED", "true")

TEST_PASSWORD = os.environ["ACCESS_PASSWORD"]


# ===========================================
# Sample Data Fixtures
# ===========================================

@pytest.fixture
def sample_proposal_data() -> Dict[str, Any]:
    """Extraction result for a bakery website project."""
    return {
        "client_name": "Sunrise Bakery",
        "project_summary": (
            "Sunrise Bakery is a family-owned artisan bakery looking to establish a "
            "strong online presence and enable online ordering for pickup."
        ),
        "deliverables": [
            {
                "name": "Homepage Design",
                "description": "Hero imagery of fresh-baked goods, daily specials and store hours."
            },
            {
                "name": "Product Catalog",
                "description": "Pages for Breads, Pastries, Cakes and Seasonal Specials."
            },
            {
                "name": "Online Ordering System",
                "description": "Square integration for pickup orders."
            }
        ],
        "timeline": [
            {"phase": "Discovery & Planning", "duration": "1 week",
             "description": "Gather brand assets, finalize requirements"},
            {"phase": "Design", "duration": "2 weeks",
             "description": "Wireframes, visual design, client review"},
            {"phase": "Development", "duration": "3 weeks",
             "description": "Build responsive website, integrate Square"},
            {"phase": "Content & Testing", "duration": "1 week",
             "description": "Add products, test ordering flow"},
            {"phase": "Launch", "duration": "1 week",
             "description": "Final review, DNS setup, go-live"}
        ],
        "client_needs": [
            "High-resolution product photography",
            "Final logo files in vector format",
            "Complete product list with descriptions and pricing"
        ],
        "technical_requirements": {
            "cms": "WordPress with WooCommerce",
            "integrations": ["Square POS", "Google Maps"],
            "features": ["Mobile-responsive design", "SEO optimization"]
        },
        "payment_milestones": [
            {"milestone": "Upon agreement", "percentage": 30},
            {"milestone": "Upon design approval", "percentage": 40},
            {"milestone": "Upon project completion", "percentage": 30}
        ]
    }


@pytest.fixture
def sample_proposal(sample_proposal_data):
    """Sample data as a ProposalInput."""
    from proposalgen.models import ProposalInput
    return ProposalInput(**sample_proposal_data)


@pytest.fixture
def sample_business():
    """Business settings with a phone number."""
    from proposalgen.models import BusinessSettings
    return BusinessSettings(
        name="Mason Price Design",
        email="mason@example.com",
        phone="(555) 123-4567"
    )


@pytest.fixture
def sample_completion(sample_proposal_data) -> str:
    """Completion text as the model usually returns it, wrapped in a fence."""
    return "```json\n" + json.dumps(sample_proposal_data, indent=2) + "\n```"


@pytest.fixture
def sample_transcript() -> str:
    """Discovery call transcript."""
    return """
Mason: Thanks for hopping on. Tell me about the bakery.
Maria: We're Sunrise Bakery, three generations of bread. We need a real website.
Mason: What should people be able to do on it?
Maria: See our menu, order ahead for pickup, and read our story.
Mason: Do you already use a point of sale?
Maria: Square, in the shop.
Mason: Great, we can connect online orders to Square. Timeline-wise, about two months?
Maria: That works. We'd love to launch before the holidays.
    """


@pytest.fixture
def sample_feed_xml() -> str:
    """Channel feed with two videos and one broken entry."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns:yt="http://www.youtube.com/xml/schemas/2015" xmlns="http://www.w3.org/2005/Atom">
 <title>Studio Channel</title>
 <entry>
  <id>yt:video:abc123</id>
  <yt:videoId>abc123</yt:videoId>
  <title>Redesigning a Bakery Website</title>
  <link rel="alternate" href="https://www.youtube.com/watch?v=abc123"/>
  <published>2026-10-01T12:00:00+00:00</published>
  <updated>2026-10-02T08:30:00+00:00</updated>
 </entry>
 <entry>
  <id>yt:video:missing</id>
  <title>No video id here</title>
  <published>2026-09-20T12:00:00+00:00</published>
 </entry>
 <entry>
  <id>yt:video:def456</id>
  <yt:videoId>def456</yt:videoId>
  <title>Pricing Web Projects</title>
  <published>2026-09-15T12:00:00+00:00</published>
 </entry>
</feed>
"""


# ===========================================
# Fake Notion Client
# ===========================================

NOTION_DATABASE_SCHEMA = {
    "id": "db_test",
    "properties": {
        "Status": {
            "type": "status",
            "status": {
                "options": [
                    {"name": "Contacted", "color": "gray"},
                    {"name": "Proposal Sent", "color": "blue"},
                    {"name": "Won", "color": "green"}
                ]
            }
        },
        "Lead Source": {
            "type": "select",
            "select": {
                "options": [
                    {"name": "Referral", "color": "purple"},
                    {"name": "Instagram", "color": "pink"}
                ]
            }
        }
    }
}


def _as_page_property(prop: Dict[str, Any]) -> Dict[str, Any]:
    """Mirror how Notion echoes written properties back, with plain_text."""
    prop = copy.deepcopy(prop)
    for key in ("title", "rich_text"):
        if key in prop:
            for part in prop[key]:
                part["plain_text"] = part["text"]["content"]
    return prop


class _FakePages:
    def __init__(self, store: Dict[str, Dict[str, Any]]):
        self.store = store
        self.calls: List[Dict[str, Any]] = []

    async def create(self, parent: Dict[str, Any], properties: Dict[str, Any]):
        self.calls.append({"op": "create", "parent": parent, "properties": properties})
        page_id = str(uuid.uuid4())
        page = {
            "id": page_id,
            "created_time": "2026-10-16T10:00:00.000Z",
            "last_edited_time": "2026-10-16T10:00:00.000Z",
            "properties": {k: _as_page_property(v) for k, v in properties.items()}
        }
        self.store[page_id] = page
        return copy.deepcopy(page)

    async def update(self, page_id: str, properties: Dict[str, Any]):
        self.calls.append({"op": "update", "page_id": page_id, "properties": properties})
        page = self.store[page_id]
        page["properties"].update({k: _as_page_property(v) for k, v in properties.items()})
        page["last_edited_time"] = "2026-10-16T11:00:00.000Z"
        return copy.deepcopy(page)


class _FakeDatabases:
    async def retrieve(self, database_id: str):
        return copy.deepcopy(NOTION_DATABASE_SCHEMA)


class FakeNotionClient:
    """In-memory stand-in for notion_client.AsyncClient."""

    def __init__(self):
        self.store: Dict[str, Dict[str, Any]] = {}
        self.pages = _FakePages(self.store)
        self.databases = _FakeDatabases()
        self.queries: List[Dict[str, Any]] = []

    async def request(self, path: str, method: str, body: Optional[Dict[str, Any]] = None):
        self.queries.append({"path": path, "method": method, "body": body})

        def title(page):
            parts = page["properties"].get("Name", {}).get("title") or []
            return parts[0]["plain_text"] if parts else ""

        results = sorted(self.store.values(), key=title)
        return {"results": copy.deepcopy(results), "has_more": False}


@pytest.fixture
def fake_notion(monkeypatch) -> FakeNotionClient:
    """Route the CRM service to an in-memory Notion database."""
    from proposalgen.integrations.notion import notion_crm_service

    fake = FakeNotionClient()
    monkeypatch.setattr(notion_crm_service, "_client", fake)
    return fake


# ===========================================
# Isolation Fixtures
# ===========================================

@pytest.fixture(autouse=True)
def isolated_files(tmp_path, monkeypatch):
    """Keep settings and generated proposals inside the test's tmp dir."""
    from proposalgen.core.settings_store import settings_store
    from proposalgen.services.proposal_service import proposal_service

    monkeypatch.setattr(settings_store, "_path", tmp_path / "settings.json")
    monkeypatch.setattr(proposal_service, "_output_dir", tmp_path / "output")
    yield tmp_path


@pytest.fixture
def markdown_mode(monkeypatch):
    """Make /api/generate-pdf return markdown JSON."""
    from proposalgen.core.config import get_settings
    monkeypatch.setattr(get_settings(), "RENDER_MODE", "markdown")


# ===========================================
# Client Fixtures
# ===========================================

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client without a token."""
    from proposalgen.main import app
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_token() -> str:
    """A freshly issued access token."""
    from proposalgen.services.auth import access_gate
    return access_gate.issue(TEST_PASSWORD)


@pytest.fixture
def auth_client(client: TestClient, auth_token: str) -> TestClient:
    """Test client sending X-Auth-Token on every request."""
    client.headers.update({"X-Auth-Token": auth_token})
    return client


# ===========================================
# Pytest Configuration
# ===========================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "pdf: needs the WeasyPrint system libraries"
    )
