from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services import token_service
from app.services.credential_registry import event_log, registry

# Ensure repo root is on sys.path so `import app` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

INSTITUTION = "institution-1"


@pytest.fixture(autouse=True)
def reset_registry_state() -> None:
    """Return the module-level registry to its freshly-deployed state."""
    registry.reset()
    event_log.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def mint_token(username: str = "test-user") -> str:
    """Create a valid ES256 JWT for testing."""
    return token_service.create_access_token(sub=username)


def auth(token: str | None) -> dict[str, str]:
    if token is None:
        return {}
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_token() -> str:
    """Token for the identity that owns the module-level registry."""
    return mint_token(username=registry.owner)


@pytest.fixture
def institution_token() -> str:
    """Token for INSTITUTION.  Not authorized until a test authorizes it."""
    return mint_token(username=INSTITUTION)


@pytest.fixture
def token() -> str:
    """Token for an identity the registry knows nothing about."""
    return mint_token()


def issue_payload(
    student: str = "Alice",
    course: str = "CS101",
    institution: str = "MIT",
    credential_hash: str = "hash1",
) -> dict[str, str]:
    return {
        "student_name": student,
        "course_name": course,
        "institution_name": institution,
        "credential_hash": credential_hash,
    }
