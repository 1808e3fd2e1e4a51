"""
QR Payload Codec
Encodes card holders into verification URLs and parses them back
"""

from typing import Optional
from urllib.parse import urlsplit, quote, unquote

from cardhub.config import settings
from cardhub.exceptions import InvalidFormatError, UnknownSubjectTypeError
from cardhub.schemas.id_card import IdentifierKind, QRPayload
from cardhub.schemas.subject import Subject
from cardhub.schemas.template import IDCardTemplateType

VERIFY_SEGMENT = "verify"

STUDENT = "student"
TEACHER = "teacher"
EMPLOYEE = "employee"
STAFF = "staff"
SUBJECT_TYPES = (STUDENT, TEACHER, EMPLOYEE, STAFF)

# Alternate student identifiers carry an extra path segment
STUDENT_KIND_SEGMENTS = {
    IdentifierKind.ROLL_NUMBER: "roll",
    IdentifierKind.ADMISSION_NUMBER: "admission",
}
STUDENT_SEGMENT_KINDS = {segment: kind for kind, segment in STUDENT_KIND_SEGMENTS.items()}


def encode(
    subject_type: str,
    identifier_kind: IdentifierKind,
    identifier_value: str,
    base_url: Optional[str] = None,
) -> str:
    """
    Build a verification URL

    `{base}/verify/{type}/{value}`, or `{base}/verify/student/roll/{value}`
    and `.../admission/{value}` for the alternate student identifiers.
    """
    base = (base_url or settings.FRONTEND_URL).rstrip("/")
    segments = [VERIFY_SEGMENT, subject_type]
    if subject_type == STUDENT and identifier_kind in STUDENT_KIND_SEGMENTS:
        segments.append(STUDENT_KIND_SEGMENTS[identifier_kind])
    segments.append(quote(identifier_value or "", safe=""))
    return f"{base}/{'/'.join(segments)}"


def decode(url: str) -> QRPayload:
    """
    Parse a verification URL

    Raises:
        InvalidFormatError: not a URL, or the path does not start with /verify/
        UnknownSubjectTypeError: the type segment is not student/teacher/employee/staff
    """
    try:
        parts = urlsplit((url or "").strip())
    except ValueError:
        raise InvalidFormatError()

    if not parts.scheme or not parts.netloc:
        raise InvalidFormatError()

    segments = parts.path.split("/")[1:]
    if segments and segments[-1] == "":
        segments = segments[:-1]

    if len(segments) < 2 or segments[0] != VERIFY_SEGMENT:
        raise InvalidFormatError()

    subject_type = segments[1]
    rest = segments[2:]

    if subject_type not in SUBJECT_TYPES:
        raise UnknownSubjectTypeError(subject_type)

    if subject_type == STUDENT and len(rest) == 2 and rest[0] in STUDENT_SEGMENT_KINDS:
        kind = STUDENT_SEGMENT_KINDS[rest[0]]
        rest = rest[1:]
    elif subject_type == STUDENT:
        kind = IdentifierKind.STUDENT_ID
    else:
        kind = IdentifierKind.EMPLOYEE_ID

    if len(rest) != 1 or not rest[0]:
        raise InvalidFormatError()

    return QRPayload(
        subject_type=subject_type,
        identifier_kind=kind,
        identifier_value=unquote(rest[0]),
    )


def type_prefix(template_type: IDCardTemplateType) -> str:
    return template_type.value.lower().replace("_", "-")


def build_payload_url(
    template_type: IDCardTemplateType,
    binding: Optional[str],
    subject: Subject,
    base_url: Optional[str] = None,
) -> str:
    """
    QR payload for a card, chosen by the database field the QR field is bound to

    Unrecognized bindings fall back to `{base}/verify/{type-prefix}/{subject id}`.
    """
    student = subject.student if subject.kind == "student" else None
    teacher = subject.teacher if subject.kind == "teacher" else None
    employee = teacher or (subject.staff if subject.kind == "staff" else None)

    if binding == "studentId" and student:
        return encode(STUDENT, IdentifierKind.STUDENT_ID, student.student_id or "", base_url)
    if binding == "rollNumber" and student:
        return encode(STUDENT, IdentifierKind.ROLL_NUMBER, student.roll_number or "", base_url)
    if binding == "admissionNumber" and student:
        return encode(STUDENT, IdentifierKind.ADMISSION_NUMBER, student.admission_number or "", base_url)
    if binding == "employeeId" and employee:
        return encode(EMPLOYEE, IdentifierKind.EMPLOYEE_ID, employee.employee_id or "", base_url)
    # /verify/teacher/ only resolves teachers
    if binding == "teacherId" and teacher:
        return encode(TEACHER, IdentifierKind.EMPLOYEE_ID, teacher.employee_id or "", base_url)

    base = (base_url or settings.FRONTEND_URL).rstrip("/")
    return f"{base}/{VERIFY_SEGMENT}/{type_prefix(template_type)}/{quote(subject.subject_id, safe='')}"
