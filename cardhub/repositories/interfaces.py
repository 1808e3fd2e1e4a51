"""
Repository interfaces.

Services depend on these protocols, not on the SQL implementations, so the
same issuance and verification code runs against PostgreSQL or an in-memory
store.
"""

from datetime import datetime
from typing import Protocol, Optional, List, Sequence, Tuple, runtime_checkable

from cardhub.schemas.id_card import (
    IdentifierKind,
    IssuedCredential,
    IssuedCardSummary,
    IDCardListFilters,
)
from cardhub.schemas.school import SchoolInformation
from cardhub.schemas.subject import (
    UserAccount,
    StudentSubject,
    TeacherSubject,
    StaffSubject,
)
from cardhub.schemas.template import IDCardTemplate, IDCardTemplateType


@runtime_checkable
class ISubjectRepository(Protocol):
    """Read access to students, teachers and staff. Soft-deleted rows are never returned."""

    async def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        """
        Get a user with whichever student/teacher/staff profiles exist.

        Returns:
            UserAccount, or None when no such user exists
        """
        ...

    async def find_student(self, kind: IdentifierKind, value: str) -> Optional[StudentSubject]:
        """Find a student by student ID, roll number or admission number."""
        ...

    async def find_teacher(self, identifier: str) -> Optional[TeacherSubject]:
        """Find a teacher whose employee ID or user ID equals `identifier`."""
        ...

    async def find_staff(self, identifier: str) -> Optional[StaffSubject]:
        """Find a staff member whose employee ID or user ID equals `identifier`."""
        ...

    async def list_class_student_ids(self, class_id: str) -> List[str]:
        """User IDs of all students in a class."""
        ...

    async def list_teacher_ids(self) -> List[str]:
        """User IDs of all active teachers."""
        ...

    async def list_staff_ids(self) -> List[str]:
        """User IDs of all active staff."""
        ...


@runtime_checkable
class ITemplateRepository(Protocol):

    async def get_by_id(self, template_id: str, with_fields: bool = True) -> Optional[IDCardTemplate]:
        """Get a template, with its fields in render order."""
        ...

    async def increment_usage(self, template_id: str) -> None:
        """Add one to the template's usage counter."""
        ...


@runtime_checkable
class ICredentialRepository(Protocol):

    async def create(self, credential: IssuedCredential) -> IssuedCredential:
        ...

    async def touch(self, credential_id: str) -> None:
        """Mark a credential as superseded by bumping its updated_at."""
        ...

    async def get_by_id(self, credential_id: str) -> Optional[IssuedCredential]:
        ...

    async def find_latest_by_subject(
        self,
        subject_id: str,
        types: Sequence[IDCardTemplateType],
    ) -> Optional[IssuedCredential]:
        """
        Most recently issued credential of any of `types` for a subject.

        Ordering is by issued_at descending; template_name is filled in.
        """
        ...

    async def list_by_subject(self, subject_id: str) -> List[IssuedCredential]:
        """All credentials of a subject, newest first."""
        ...

    async def search(self, filters: IDCardListFilters, now: datetime) -> Tuple[List[IssuedCardSummary], int]:
        """
        One page of issued credentials matching `filters`, newest first.

        `now` decides which credentials count as active. Returns the page and
        the total number of matches.
        """
        ...


@runtime_checkable
class ISchoolInformationProvider(Protocol):

    async def get(self) -> Optional[SchoolInformation]:
        ...
