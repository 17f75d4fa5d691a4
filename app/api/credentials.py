"""Credential issuance, verification and revocation endpoints.

- POST /v1/credentials                : issue (authorized institutions)
- GET  /v1/credentials/{id}/verify    : public status check, no hash
- GET  /v1/credentials/{id}           : public full record
- POST /v1/credentials/{id}/revoke    : revoke (authorized institutions)

Handlers are `async def` and call the registry without awaiting in
between, so every registry operation runs on the event loop start to
finish and two requests never interleave inside the registry.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.api.dependencies import require_user
from app.api.errors import registry_http_error
from app.models.credential import Credential
from app.models.principal import Principal
from app.services import credential_registry
from app.services.credential_registry import RegistryError

router = APIRouter(prefix="/v1/credentials", tags=["credentials"])


class CredentialIssueIn(BaseModel):
    student_name: str
    course_name: str
    institution_name: str
    credential_hash: str


class CredentialIssueOut(BaseModel):
    id: int


class CredentialVerifyOut(BaseModel):
    id: int
    is_valid: bool
    student_name: str
    course_name: str
    institution_name: str
    issue_date: int


class CredentialOut(BaseModel):
    id: int
    student_name: str
    course_name: str
    institution_name: str
    issue_date: int
    credential_hash: str
    is_valid: bool


def _credential_out(credential_id: int, cred: Credential) -> CredentialOut:
    return CredentialOut(
        id=credential_id,
        student_name=cred.student_name,
        course_name=cred.course_name,
        institution_name=cred.institution_name,
        issue_date=cred.issue_date,
        credential_hash=cred.credential_hash,
        is_valid=cred.is_valid,
    )


@router.post(
    "",
    response_model=CredentialIssueOut,
    status_code=status.HTTP_201_CREATED,
)
async def issue_credential(
    body: CredentialIssueIn,
    principal: Annotated[Principal, Depends(require_user)],
) -> CredentialIssueOut:
    try:
        credential_id = credential_registry.registry.issue_credential(
            principal.user_id,
            body.student_name,
            body.course_name,
            body.institution_name,
            body.credential_hash,
        )
    except RegistryError as e:
        raise registry_http_error(e) from None
    return CredentialIssueOut(id=credential_id)


@router.get("/{credential_id}/verify", response_model=CredentialVerifyOut)
async def verify_credential(credential_id: int) -> CredentialVerifyOut:
    """Public verification: validity plus the credential facts, no hash."""
    try:
        result = credential_registry.registry.verify_credential(credential_id)
    except RegistryError as e:
        raise registry_http_error(e) from None
    return CredentialVerifyOut(
        id=credential_id,
        is_valid=result.is_valid,
        student_name=result.student_name,
        course_name=result.course_name,
        institution_name=result.institution_name,
        issue_date=result.issue_date,
    )


@router.get("/{credential_id}", response_model=CredentialOut)
async def get_credential(credential_id: int) -> CredentialOut:
    try:
        cred = credential_registry.registry.get_credential(credential_id)
    except RegistryError as e:
        raise registry_http_error(e) from None
    return _credential_out(credential_id, cred)


@router.post("/{credential_id}/revoke", response_model=CredentialOut)
async def revoke_credential(
    credential_id: int,
    principal: Annotated[Principal, Depends(require_user)],
) -> CredentialOut:
    """Revoke a credential.  Any authorized institution may revoke any
    credential, including ones another institution issued."""
    reg = credential_registry.registry
    try:
        reg.revoke_credential(principal.user_id, credential_id)
    except RegistryError as e:
        raise registry_http_error(e) from None
    return _credential_out(credential_id, reg.get_credential(credential_id))
