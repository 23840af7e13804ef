"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from evento.api import create_app
from evento.components import create_registry
from evento.core.config import Settings
from evento.core.container import create_container
from evento.document import parse_template
from evento.monitoring import MetricsCollector
from evento.services import RenderService, TemplateService
from evento.storage import InMemoryInstanceRepository, InMemoryTemplateRepository


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["EVENTO_LOG_LEVEL"] = "DEBUG"
    os.environ["EVENTO_JSON_LOGS"] = "false"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (cache on, small limits)."""
    return Settings(enable_cache=True, cache_size=16, max_data_depth=8, max_template_nodes=50)


@pytest.fixture
def registry():
    """Fresh component registry with the built-in palette."""
    return create_registry()


@pytest.fixture
def metrics():
    """Metrics collector on an isolated prometheus registry."""
    return MetricsCollector(CollectorRegistry())


# ============================================================================
# Storage and Service Fixtures
# ============================================================================

@pytest.fixture
def template_repo():
    return InMemoryTemplateRepository()


@pytest.fixture
def instance_repo():
    return InMemoryInstanceRepository()


@pytest.fixture
def template_service(template_repo, instance_repo, registry, settings, metrics):
    return TemplateService(template_repo, instance_repo, registry, settings, metrics)


@pytest.fixture
def render_service(template_repo, instance_repo, registry, settings, metrics):
    return RenderService(template_repo, instance_repo, registry, settings, metrics)


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
def client(settings, metrics):
    """Test client over an app with its own container."""
    app = create_app(settings, create_container(settings, metrics))
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def invitation_document():
    """Nested builder document: container with a bound heading, image and QR code."""
    return {
        "name": "Garden Party",
        "description": "Summer invitation",
        "category": "birthday",
        "components": [
            {
                "id": "page",
                "type": "container",
                "props": {"display": "flex", "gap": 12},
                "children": [
                    {"id": "title", "type": "heading", "props": {"content": "Welcome {{guest.name}}", "level": 1}},
                    {"id": "photo", "type": "image", "props": {"alt": "Venue"}},
                    {"id": "rsvp", "type": "qrcode", "props": {"value": "{{event.url}}", "size": 500}},
                ],
            },
            {"id": "when", "type": "datetime", "props": {"value": "{{event.date}}"}},
        ],
        "previewData": {
            "default": {
                "guest": {"name": "Ada"},
                "event": {"url": "https://example.org/rsvp", "date": "2026-06-01"},
            },
        },
    }


@pytest.fixture
def invitation_data():
    return {
        "guest": {"name": "Grace"},
        "event": {"url": "https://example.org/rsvp/42", "date": "2026-07-04T18:30:00Z"},
    }


@pytest.fixture
def invitation(invitation_document):
    """Parsed (unsaved) invitation template."""
    return parse_template(invitation_document)


@pytest.fixture
def unbound_document():
    """Template whose text binds a path most payloads lack."""
    return {
        "name": "Contact Card",
        "components": [
            {"id": "email", "type": "text", "props": {"content": {"$ref": "user.email"}}},
        ],
    }


@pytest.fixture
def carousel_document():
    """Template using a component type the registry does not know."""
    return {
        "name": "Slideshow",
        "components": [
            {"id": "slides", "type": "carousel", "props": {}},
        ],
    }
