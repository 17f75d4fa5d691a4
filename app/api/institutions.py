"""Issuer authorization endpoints and registry info.

Only the registry owner may change who is authorized; lookups are public.
Identities are matched as paths so DIDs and URLs containing "/" work.
The owner's own authorization cannot be revoked.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.api.dependencies import require_user
from app.api.errors import registry_http_error
from app.models.principal import Principal
from app.services import credential_registry
from app.services.credential_registry import RegistryError

router = APIRouter(tags=["institutions"])


class InstitutionIn(BaseModel):
    identity: str


class InstitutionOut(BaseModel):
    identity: str
    authorized: bool


class RegistryInfoOut(BaseModel):
    owner: str
    credential_count: int


@router.post(
    "/v1/institutions",
    response_model=InstitutionOut,
    status_code=status.HTTP_201_CREATED,
)
async def authorize_institution(
    body: InstitutionIn,
    principal: Annotated[Principal, Depends(require_user)],
) -> InstitutionOut:
    try:
        credential_registry.registry.authorize_institution(
            principal.user_id, body.identity
        )
    except RegistryError as e:
        raise registry_http_error(e) from None
    return InstitutionOut(identity=body.identity, authorized=True)


@router.delete(
    "/v1/institutions/{identity:path}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def revoke_institution_access(
    identity: str,
    principal: Annotated[Principal, Depends(require_user)],
) -> None:
    try:
        credential_registry.registry.revoke_institution_access(
            principal.user_id, identity
        )
    except RegistryError as e:
        raise registry_http_error(e) from None


@router.get("/v1/institutions/{identity:path}", response_model=InstitutionOut)
async def get_institution(identity: str) -> InstitutionOut:
    return InstitutionOut(
        identity=identity,
        authorized=credential_registry.registry.is_authorized(identity),
    )


@router.get("/v1/registry", response_model=RegistryInfoOut)
async def registry_info() -> RegistryInfoOut:
    reg = credential_registry.registry
    return RegistryInfoOut(owner=reg.owner, credential_count=reg.credential_count)
