"""Demo: walk the issue → authorize → revoke flow using FastAPI TestClient.

Run with:
    python scripts/demo_registry_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from app.main import app
from app.services import token_service
from app.services.credential_registry import event_log, registry

INSTITUTION = "institution-demo"


def _auth(sub: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.create_access_token(sub=sub)}"}


def main() -> None:
    client = TestClient(app)
    owner = _auth(registry.owner)
    institution = _auth(INSTITUTION)

    # ── Step 1: owner issues a credential ───────────────────────────
    r = client.post(
        "/v1/credentials",
        json={
            "student_name": "Alice",
            "course_name": "CS101",
            "institution_name": "MIT",
            "credential_hash": "hash1",
        },
        headers=owner,
    )
    first_id = r.json()["id"]
    print(f"1. POST   /v1/credentials (owner)       → {r.status_code}  id={first_id}")

    # ── Step 2: anyone verifies it ──────────────────────────────────
    r = client.get(f"/v1/credentials/{first_id}/verify")
    print(f"2. GET    /v1/credentials/{first_id}/verify     → {r.status_code}  {r.json()}")

    # ── Step 3: owner authorizes an institution ─────────────────────
    r = client.post("/v1/institutions", json={"identity": INSTITUTION}, headers=owner)
    print(f"3. POST   /v1/institutions              → {r.status_code}  {r.json()}")

    # ── Step 4: institution issues a second credential ──────────────
    r = client.post(
        "/v1/credentials",
        json={
            "student_name": "Bob",
            "course_name": "CS102",
            "institution_name": "Demo U",
            "credential_hash": "hash2",
        },
        headers=institution,
    )
    second_id = r.json()["id"]
    print(f"4. POST   /v1/credentials (institution) → {r.status_code}  id={second_id}")

    # ── Step 5: owner revokes the first credential ──────────────────
    r = client.post(f"/v1/credentials/{first_id}/revoke", headers=owner)
    print(f"5. POST   /v1/credentials/{first_id}/revoke     → {r.status_code}")
    for cid in (first_id, second_id):
        valid = client.get(f"/v1/credentials/{cid}/verify").json()["is_valid"]
        print(f"   credential {cid} is_valid={valid}")

    # ── Step 6: owner revokes the institution, which can no longer issue
    r = client.delete(f"/v1/institutions/{INSTITUTION}", headers=owner)
    print(f"6. DELETE /v1/institutions/{INSTITUTION} → {r.status_code}")
    r = client.post(
        "/v1/credentials",
        json={
            "student_name": "Carol",
            "course_name": "CS103",
            "institution_name": "Demo U",
            "credential_hash": "hash3",
        },
        headers=institution,
    )
    print(f"7. POST   /v1/credentials (revoked)     → {r.status_code}  {r.json()['detail']}")

    print("\nEvents:")
    for event in event_log.events():
        print(f"   {event.name}: {event}")


if __name__ == "__main__":
    main()
