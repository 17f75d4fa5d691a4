"""Credential registry: issue, verify and revoke educational credentials.

One owned state object holds:

  _credentials  dense id -> Credential map; ids run 1..credential_count
  _authorized   identities allowed to issue and revoke credentials
  _owner        the single identity that manages _authorized

Every mutator runs all of its checks before it writes anything, so a
rejected call leaves no trace: no state change, no event, no "ok"
metric.  Rejections raise a RegistryError subclass whose `code` the
HTTP layer turns into a status and an error body.

Caller identity and the current time come from outside.  Callers pass
their identity as the first argument of each guarded operation and the
registry takes time from an injected clock.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from typing import NoReturn

from app.core.config import SETTINGS
from app.core.metrics import REGISTRY_CREDENTIALS, REGISTRY_OPERATIONS
from app.models.credential import Credential, CredentialStatus
from app.models.events import (
    CredentialIssued,
    CredentialRevoked,
    InstitutionAuthorized,
    InstitutionRevoked,
)
from app.services.event_log import EventLog, EventSink

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class RegistryError(Exception):
    """Base class for every registry rejection."""

    code = "registry_error"


class UnauthorizedError(RegistryError):
    """Caller lacks the required role (authorized institution or owner)."""

    code = "unauthorized"


class CredentialNotFoundError(RegistryError):
    code = "not_found"


class CredentialAlreadyRevokedError(RegistryError):
    code = "already_revoked"


class InstitutionAlreadyAuthorizedError(RegistryError):
    code = "already_authorized"


class InstitutionNotAuthorizedError(RegistryError):
    code = "not_authorized"


class CannotRevokeOwnerError(RegistryError):
    code = "cannot_revoke_owner"


def _utc_now() -> int:
    return int(datetime.datetime.now(datetime.UTC).timestamp())


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class CredentialRegistry:
    def __init__(
        self,
        owner: str,
        *,
        clock: Clock | None = None,
        event_log: EventSink | None = None,
    ) -> None:
        if not owner:
            raise ValueError("owner must be non-empty")
        self._owner = owner
        self._clock: Clock = clock or _utc_now
        self._events: EventSink = event_log if event_log is not None else EventLog()
        self._credentials: dict[int, Credential] = {}
        self._count = 0
        # The owner is authorized from the start and can never be removed.
        self._authorized: set[str] = {owner}

    # --- read-only state ---

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def credential_count(self) -> int:
        return self._count

    def is_authorized(self, identity: str) -> bool:
        return identity in self._authorized

    def reset(self) -> None:
        """Drop every credential and institution, keeping only the owner."""
        self._credentials.clear()
        self._count = 0
        self._authorized = {self._owner}
        REGISTRY_CREDENTIALS.set(0)
        logger.info("Registry reset owner=%s", self._owner)

    # --- credentials ---

    def issue_credential(
        self,
        caller: str,
        student_name: str,
        course_name: str,
        institution_name: str,
        credential_hash: str,
    ) -> int:
        """Record a new credential and return its id.

        Ids are allocated densely: the n-th successful issuance gets id n.
        Inputs are stored as given; duplicates are not detected.
        """
        self._require_authorized(caller, "issue")

        credential_id = self._count + 1
        self._credentials[credential_id] = Credential.new(
            student_name=student_name,
            course_name=course_name,
            institution_name=institution_name,
            credential_hash=credential_hash,
            issue_date=self._clock(),
        )
        self._count = credential_id

        REGISTRY_OPERATIONS.labels(operation="issue", outcome="ok").inc()
        REGISTRY_CREDENTIALS.set(self._count)
        logger.info(
            "Issued credential id=%d issuer=%s course=%s",
            credential_id,
            caller,
            course_name,
            extra={"credential_id": credential_id},
        )
        self._events.append(
            CredentialIssued(
                credential_id=credential_id,
                student_name=student_name,
                course_name=course_name,
                issuer=caller,
            )
        )
        return credential_id

    def verify_credential(self, credential_id: int) -> CredentialStatus:
        return self.get_credential(credential_id).status()

    def get_credential(self, credential_id: int) -> Credential:
        if not self._exists(credential_id):
            raise CredentialNotFoundError(f"credential {credential_id} not found")
        return self._credentials[credential_id]

    def revoke_credential(self, caller: str, credential_id: int) -> None:
        """Mark a credential invalid.

        Any authorized institution may revoke any credential, not only
        the ones it issued.
        """
        if not self._exists(credential_id):
            self._reject(
                CredentialNotFoundError(f"credential {credential_id} not found"),
                "revoke",
                caller,
            )
        self._require_authorized(caller, "revoke")

        current = self._credentials[credential_id]
        if not current.is_valid:
            self._reject(
                CredentialAlreadyRevokedError(
                    f"credential {credential_id} is already revoked"
                ),
                "revoke",
                caller,
            )

        self._credentials[credential_id] = current.revoked()

        REGISTRY_OPERATIONS.labels(operation="revoke", outcome="ok").inc()
        logger.info(
            "Revoked credential id=%d by=%s",
            credential_id,
            caller,
            extra={"credential_id": credential_id},
        )
        self._events.append(CredentialRevoked(credential_id=credential_id))

    # --- institutions ---

    def authorize_institution(self, caller: str, identity: str) -> None:
        self._require_owner(caller, "authorize")
        if identity in self._authorized:
            self._reject(
                InstitutionAlreadyAuthorizedError(f"{identity} is already authorized"),
                "authorize",
                caller,
            )

        self._authorized.add(identity)

        REGISTRY_OPERATIONS.labels(operation="authorize", outcome="ok").inc()
        logger.info("Authorized institution identity=%s", identity)
        self._events.append(InstitutionAuthorized(identity=identity))

    def revoke_institution_access(self, caller: str, identity: str) -> None:
        """Remove an institution's right to issue and revoke.

        Naming the owner always fails with CannotRevokeOwnerError, whoever
        the caller is.
        """
        if identity == self._owner:
            self._reject(
                CannotRevokeOwnerError("the owner's access cannot be revoked"),
                "revoke_access",
                caller,
            )
        self._require_owner(caller, "revoke_access")
        if identity not in self._authorized:
            self._reject(
                InstitutionNotAuthorizedError(f"{identity} is not authorized"),
                "revoke_access",
                caller,
            )

        self._authorized.discard(identity)

        REGISTRY_OPERATIONS.labels(operation="revoke_access", outcome="ok").inc()
        logger.info("Revoked institution access identity=%s", identity)
        self._events.append(InstitutionRevoked(identity=identity))

    # --- guards ---

    def _exists(self, credential_id: int) -> bool:
        # bool is an int subclass; True must not resolve to credential 1
        if isinstance(credential_id, bool) or not isinstance(credential_id, int):
            return False
        return 1 <= credential_id <= self._count

    def _require_authorized(self, caller: str, operation: str) -> None:
        if caller not in self._authorized:
            self._reject(
                UnauthorizedError("caller is not an authorized institution"),
                operation,
                caller,
            )

    def _require_owner(self, caller: str, operation: str) -> None:
        if caller != self._owner:
            self._reject(
                UnauthorizedError("caller is not the registry owner"),
                operation,
                caller,
            )

    def _reject(self, error: RegistryError, operation: str, caller: str) -> NoReturn:
        REGISTRY_OPERATIONS.labels(operation=operation, outcome=error.code).inc()
        logger.warning(
            "Rejected %s by=%s reason=%s: %s", operation, caller, error.code, error
        )
        raise error


# Module-level singleton used by the HTTP layer.  Tests reset its state
# between cases (see tests/conftest.py).
event_log = EventLog()
registry = CredentialRegistry(owner=SETTINGS.registry_owner, event_log=event_log)
