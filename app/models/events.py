"""Notification records emitted by the credential registry.

Each event is an immutable fact about a committed state change.  They
are appended to the EventLog after the change is applied, so a
subscriber never sees an event for an operation that failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class CredentialIssued:
    name: ClassVar[str] = "CredentialIssued"

    credential_id: int
    student_name: str
    course_name: str
    issuer: str


@dataclass(frozen=True, slots=True)
class CredentialRevoked:
    name: ClassVar[str] = "CredentialRevoked"

    credential_id: int


@dataclass(frozen=True, slots=True)
class InstitutionAuthorized:
    name: ClassVar[str] = "InstitutionAuthorized"

    identity: str


@dataclass(frozen=True, slots=True)
class InstitutionRevoked:
    name: ClassVar[str] = "InstitutionRevoked"

    identity: str


RegistryEvent = (
    CredentialIssued | CredentialRevoked | InstitutionAuthorized | InstitutionRevoked
)
