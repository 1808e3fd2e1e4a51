"""
QR Verification Service
Resolves a scanned verification URL back to a student, teacher or staff member
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from cardhub.config import settings
from cardhub.exceptions import (
    InvalidFormatError,
    UnknownSubjectTypeError,
    SubjectNotFoundError,
)
from cardhub.repositories.interfaces import ISubjectRepository, ICredentialRepository
from cardhub.schemas.id_card import IdentifierKind, IssuedCredential
from cardhub.schemas.subject import display_name
from cardhub.schemas.template import IDCardTemplateType
from cardhub.schemas.verification import (
    CredentialInfo,
    VerifiedSubject,
    VerificationResult,
)
from cardhub.services import qr_codec
from cardhub.services.image_url import format_image_url

logger = logging.getLogger(__name__)

STUDENT_KINDS = (
    IdentifierKind.STUDENT_ID,
    IdentifierKind.ROLL_NUMBER,
    IdentifierKind.ADMISSION_NUMBER,
)


def _iso(value) -> Optional[str]:
    if isinstance(value, str):
        return value
    return value.isoformat() if value else None


class QRVerificationService:
    """Verification Resolver: QR text -> VerificationResult, never raises"""

    def __init__(
        self,
        subjects: ISubjectRepository,
        credentials: ICredentialRepository,
        image_base_url: Optional[str] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.subjects = subjects
        self.credentials = credentials
        self.image_base_url = image_base_url or settings.APP_URL
        self.clock = clock

    async def verify(self, qr_data: str) -> VerificationResult:
        """VerifyCode(qrText)"""
        try:
            payload = qr_codec.decode(qr_data)
        except UnknownSubjectTypeError as e:
            return VerificationResult(valid=False, error=e.message)
        except InvalidFormatError:
            return VerificationResult(valid=False, error="Invalid QR code format")

        try:
            if payload.subject_type == qr_codec.STUDENT:
                return await self.verify_student(payload.identifier_value, payload.identifier_kind)
            if payload.subject_type == qr_codec.TEACHER:
                return await self.verify_teacher(payload.identifier_value)
            if payload.subject_type == qr_codec.EMPLOYEE:
                return await self.verify_employee(payload.identifier_value)
            # decode only yields the four known types; what is left is staff
            return await self.verify_staff(payload.identifier_value)
        except SubjectNotFoundError as e:
            return VerificationResult(valid=False, error=e.message)
        except Exception:
            logger.exception("Unexpected error verifying QR code")
            return VerificationResult(valid=False, error="Invalid QR code format")

    async def _credential_info(
        self,
        subject_id: str,
        types: Sequence[IDCardTemplateType],
    ) -> CredentialInfo:
        credential: Optional[IssuedCredential] = await self.credentials.find_latest_by_subject(subject_id, types)
        if not credential:
            return CredentialInfo()

        return CredentialInfo(
            template_name=credential.template_name or "Unknown",
            issued_at=_iso(credential.issued_at) or "",
            expiry_date=_iso(credential.expiry_date) or "",
            is_active=credential.is_active_at(self.clock()),
        )

    async def verify_student(
        self,
        identifier: str,
        kind: IdentifierKind = IdentifierKind.STUDENT_ID,
    ) -> VerificationResult:
        if kind not in STUDENT_KINDS:
            kind = IdentifierKind.STUDENT_ID

        subject = await self.subjects.find_student(kind, identifier)
        if not subject:
            raise SubjectNotFoundError("student", identifier)

        student = subject.student
        return VerificationResult(
            valid=True,
            subject=VerifiedSubject(
                subject_id=subject.subject_id,
                subject_type="student",
                display_name=display_name(subject.user),
                identifier=identifier,
                photo_url=format_image_url(subject.photo, "student_photo", self.image_base_url) or None,
                type_specific_info={
                    "class": student.class_name,
                    "section": student.section,
                    "roll_number": student.roll_number,
                    "academic_status": student.academic_status,
                },
                credential_info=await self._credential_info(
                    subject.subject_id, [IDCardTemplateType.STUDENT]
                ),
            ),
        )

    async def verify_teacher(self, identifier: str) -> VerificationResult:
        subject = await self.subjects.find_teacher(identifier)
        if not subject:
            raise SubjectNotFoundError("teacher", identifier)

        teacher = subject.teacher
        return VerificationResult(
            valid=True,
            subject=VerifiedSubject(
                subject_id=subject.subject_id,
                subject_type="teacher",
                display_name=display_name(subject.user),
                identifier=identifier,
                photo_url=format_image_url(subject.photo, "teacher_photo", self.image_base_url) or None,
                type_specific_info={
                    "designation": teacher.designation,
                    "department": teacher.department,
                    "qualification": teacher.qualification,
                    "experience": teacher.experience_years,
                },
                credential_info=await self._credential_info(
                    subject.subject_id, [IDCardTemplateType.TEACHER]
                ),
            ),
        )

    async def verify_employee(self, identifier: str) -> VerificationResult:
        """
        'employee' codes predate the teacher/staff split: try the teacher
        lookup, then staff. Staff's not-found error is the one reported.
        """
        try:
            return await self.verify_teacher(identifier)
        except SubjectNotFoundError:
            return await self.verify_staff(identifier)

    async def verify_staff(self, identifier: str) -> VerificationResult:
        subject = await self.subjects.find_staff(identifier)
        if not subject:
            raise SubjectNotFoundError("staff", identifier)

        staff = subject.staff
        return VerificationResult(
            valid=True,
            subject=VerifiedSubject(
                subject_id=subject.subject_id,
                subject_type="staff",
                display_name=display_name(subject.user),
                identifier=identifier,
                photo_url=format_image_url(subject.photo, "staff_photo", self.image_base_url) or None,
                type_specific_info={
                    "designation": staff.designation,
                    "department": staff.department,
                    "employment_date": _iso(staff.employment_date),
                },
                credential_info=await self._credential_info(
                    subject.subject_id,
                    [IDCardTemplateType.STAFF, IDCardTemplateType.STAFF_NO_LOGIN],
                ),
            ),
        )
