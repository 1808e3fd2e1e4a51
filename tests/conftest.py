"""
Shared test fixtures.

Subjects, templates and services wired to the in-memory repositories in
tests/fakes.py. Time is pinned to NOW so expiry and academic-year values are
deterministic.
"""

import pytest
from datetime import datetime, timezone

from cardhub.schemas.school import SchoolInformation
from cardhub.schemas.subject import (
    UserAccount,
    StudentProfile,
    TeacherProfile,
    StaffProfile,
)
from cardhub.schemas.template import (
    IDCardTemplate,
    IDCardTemplateType,
    TemplateField,
    TemplateStatus,
)
from cardhub.services.field_resolver import FieldValueResolver
from cardhub.services.id_card_service import IDCardService
from cardhub.services.qr_verification_service import QRVerificationService
from tests.fakes import (
    FakeSubjectRepository,
    FakeTemplateRepository,
    FakeCredentialRepository,
    FakeSchoolProvider,
    FakeTransaction,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
FRONTEND = "https://school.example"
API = "https://api.school.example"


def clock() -> datetime:
    return NOW


@pytest.fixture
def student_account() -> UserAccount:
    return UserAccount(
        id="S1",
        first_name="Asha",
        last_name="Verma",
        email="asha@example.com",
        phone="555-0101",
        date_of_birth="2010-07-04",
        blood_group="O+",
        student=StudentProfile(
            id="sp-1",
            student_id="STU100",
            roll_number="12",
            admission_number="ADM-2019-7",
            class_id="class-5a",
            class_name="Grade 5",
            section="A",
            academic_status="ACTIVE",
            father_first_name="Ravi",
            father_last_name="Verma",
            mother_phone="555-0199",
            profile_photo_url="asha.jpg",
        ),
    )


@pytest.fixture
def teacher_account() -> UserAccount:
    return UserAccount(
        id="T1",
        full_name="Meera Nair",
        email="meera@example.com",
        teacher=TeacherProfile(
            id="tp-1",
            employee_id="E42",
            designation="Senior Teacher",
            department="Science",
            subjects_taught=["Physics", "Chemistry"],
            qualification="M.Sc",
            experience_years=8,
            date_of_joining="2017-06-01",
            profile_photo_url="/uploads/teachers/2024/meera.png",
        ),
    )


@pytest.fixture
def staff_account() -> UserAccount:
    return UserAccount(
        id="ST1",
        first_name="Joseph",
        middle_name="K",
        last_name="Mathew",
        staff=StaffProfile(
            id="stp-1",
            employee_id="E77",
            designation="Librarian",
            department="Library",
            position="Head Librarian",
            shift="Morning",
            working_hours="8-4",
            employment_date="2020-01-15",
            profile_photo_url="https://cdn.example/joseph.jpg",
        ),
    )


@pytest.fixture
def school() -> SchoolInformation:
    return SchoolInformation(
        school_name="Green Valley School",
        logo="crest.png",
        address="1 Hill Road",
        school_code="GVS-01",
    )


def _template(template_id: str, template_type: IDCardTemplateType, qr_binding: str) -> IDCardTemplate:
    return IDCardTemplate(
        id=template_id,
        name=f"{template_type.value.title()} Card",
        type=template_type,
        status=TemplateStatus.ACTIVE,
        fields=[
            TemplateField(id="f-name", field_type="TEXT", data_source="database",
                          database_field="Full Name", label="Name", x=10, y=10, width=120, height=12,
                          font_size=12, color="#000000"),
            TemplateField(id="f-school", field_type="TEXT", data_source="database",
                          database_field="schoolName", label="School", x=10, y=2, width=120, height=8),
            TemplateField(id="f-title", field_type="TEXT", data_source="static",
                          static_text="IDENTITY CARD", x=10, y=40, width=80, height=8),
            TemplateField(id="f-qr", field_type="QR_CODE", data_source="database",
                          database_field=qr_binding, label="QR", x=250, y=20, width=80, height=80),
        ],
    )


@pytest.fixture
def student_template() -> IDCardTemplate:
    return _template("tpl-student", IDCardTemplateType.STUDENT, "studentId")


@pytest.fixture
def teacher_template() -> IDCardTemplate:
    return _template("tpl-teacher", IDCardTemplateType.TEACHER, "employeeId")


@pytest.fixture
def staff_template() -> IDCardTemplate:
    return _template("tpl-staff", IDCardTemplateType.STAFF, "teacherId")


@pytest.fixture
def subjects(student_account, teacher_account, staff_account) -> FakeSubjectRepository:
    return FakeSubjectRepository([student_account, teacher_account, staff_account])


@pytest.fixture
def templates(student_template, teacher_template, staff_template) -> FakeTemplateRepository:
    return FakeTemplateRepository([student_template, teacher_template, staff_template])


@pytest.fixture
def credentials(subjects) -> FakeCredentialRepository:
    return FakeCredentialRepository(clock=clock, holders=subjects.accounts)


@pytest.fixture
def transaction(credentials, templates) -> FakeTransaction:
    return FakeTransaction(credentials, templates)


@pytest.fixture
def id_card_service(subjects, templates, credentials, school, transaction) -> IDCardService:
    return IDCardService(
        subjects=subjects,
        templates=templates,
        credentials=credentials,
        school=FakeSchoolProvider(school),
        transaction=transaction,
        resolver=FieldValueResolver(image_base_url=API, clock=clock),
        frontend_url=FRONTEND,
        clock=clock,
    )


@pytest.fixture
def verification_service(subjects, credentials) -> QRVerificationService:
    return QRVerificationService(
        subjects=subjects,
        credentials=credentials,
        image_base_url=API,
        clock=clock,
    )
