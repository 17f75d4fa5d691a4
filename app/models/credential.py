from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Credential:
    """Issued credential record.

    Only a reference hash of the underlying document is kept; the
    document itself lives outside the registry.
    """

    student_name: str
    course_name: str
    institution_name: str
    issue_date: int  # unix seconds, UTC
    credential_hash: str
    is_valid: bool = True

    @staticmethod
    def new(
        *,
        student_name: str,
        course_name: str,
        institution_name: str,
        credential_hash: str,
        issue_date: int,
    ) -> Credential:
        return Credential(
            student_name=student_name,
            course_name=course_name,
            institution_name=institution_name,
            issue_date=issue_date,
            credential_hash=credential_hash,
        )

    def revoked(self) -> Credential:
        return replace(self, is_valid=False)

    def status(self) -> CredentialStatus:
        return CredentialStatus(
            is_valid=self.is_valid,
            student_name=self.student_name,
            course_name=self.course_name,
            institution_name=self.institution_name,
            issue_date=self.issue_date,
        )


@dataclass(frozen=True, slots=True)
class CredentialStatus:
    """Public verification view: everything except the hash.

    Unpacks in field order, so callers can treat it as a plain tuple::

        is_valid, student, course, institution, issued = status
    """

    is_valid: bool
    student_name: str
    course_name: str
    institution_name: str
    issue_date: int

    def __iter__(self) -> Iterator[object]:
        yield self.is_valid
        yield self.student_name
        yield self.course_name
        yield self.institution_name
        yield self.issue_date
