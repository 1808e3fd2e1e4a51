"""
Field Value Resolver
Maps template field definitions onto student, teacher and staff records
"""

from dataclasses import dataclass, field as dataclass_field
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Union

from cardhub.schemas.school import SchoolInformation
from cardhub.schemas.subject import (
    Subject,
    StudentProfile,
    TeacherProfile,
    StaffProfile,
    display_name,
)
from cardhub.schemas.template import TemplateField, DataSource
from cardhub.services.image_url import format_image_url


@dataclass
class FieldContext:
    """Everything a mapping entry may read"""
    subject: Subject
    school: Optional[SchoolInformation]
    image_base_url: Optional[str] = None
    now: datetime = dataclass_field(default_factory=datetime.now)


def _text(value) -> str:
    return value if isinstance(value, str) else ""


def format_date(value: Union[datetime, date, str, None]) -> str:
    """Locale-style M/D/YYYY; empty string when missing or unparseable"""
    if not value:
        return ""
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        try:
            day = datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
        except ValueError:
            return ""
    return f"{day.month}/{day.day}/{day.year}"


def _student(ctx: FieldContext) -> Optional[StudentProfile]:
    return ctx.subject.student if ctx.subject.kind == "student" else None


def _teacher(ctx: FieldContext) -> Optional[TeacherProfile]:
    return ctx.subject.teacher if ctx.subject.kind == "teacher" else None


def _staff(ctx: FieldContext) -> Optional[StaffProfile]:
    return ctx.subject.staff if ctx.subject.kind == "staff" else None


def _student_attr(name: str) -> Callable[[FieldContext], str]:
    def resolve(ctx: FieldContext) -> str:
        student = _student(ctx)
        return _text(getattr(student, name)) if student else ""
    return resolve


def _teacher_attr(name: str) -> Callable[[FieldContext], str]:
    def resolve(ctx: FieldContext) -> str:
        teacher = _teacher(ctx)
        return _text(getattr(teacher, name)) if teacher else ""
    return resolve


def _staff_attr(name: str) -> Callable[[FieldContext], str]:
    def resolve(ctx: FieldContext) -> str:
        staff = _staff(ctx)
        return _text(getattr(staff, name)) if staff else ""
    return resolve


def _employee_attr(name: str) -> Callable[[FieldContext], str]:
    """Attribute present on both teacher and staff profiles"""
    def resolve(ctx: FieldContext) -> str:
        profile = _teacher(ctx) or _staff(ctx)
        return _text(getattr(profile, name)) if profile else ""
    return resolve


def _user_attr(name: str) -> Callable[[FieldContext], str]:
    def resolve(ctx: FieldContext) -> str:
        return _text(getattr(ctx.subject.user, name))
    return resolve


def _photo(image_field_type: str) -> Callable[[FieldContext], str]:
    def resolve(ctx: FieldContext) -> str:
        return format_image_url(ctx.subject.photo, image_field_type, ctx.image_base_url)
    return resolve


def _school_attr(name: str, not_set: str) -> Callable[[FieldContext], str]:
    def resolve(ctx: FieldContext) -> str:
        value = getattr(ctx.school, name) if ctx.school else None
        return value or not_set
    return resolve


def _school_logo(ctx: FieldContext) -> str:
    if not ctx.school or not ctx.school.logo:
        return ""
    return format_image_url(ctx.school.logo, "school_logo", ctx.image_base_url)


def _full_name(ctx: FieldContext) -> str:
    return display_name(ctx.subject.user)


def _date_of_birth(ctx: FieldContext) -> str:
    return format_date(ctx.subject.user.date_of_birth)


def _academic_year(ctx: FieldContext) -> str:
    return str(ctx.now.year)


def _guardian_name(ctx: FieldContext) -> str:
    # Father first, then mother
    student = _student(ctx)
    if not student:
        return ""
    if student.father_first_name:
        return f"{student.father_first_name} {_text(student.father_last_name)}".strip()
    if student.mother_first_name:
        return f"{student.mother_first_name} {_text(student.mother_last_name)}".strip()
    return ""


def _guardian_contact(ctx: FieldContext) -> str:
    student = _student(ctx)
    if not student:
        return ""
    return _text(student.father_phone) or _text(student.mother_phone)


def _subjects_taught(ctx: FieldContext) -> str:
    teacher = _teacher(ctx)
    return ", ".join(teacher.subjects_taught) if teacher else ""


def _experience(ctx: FieldContext) -> str:
    teacher = _teacher(ctx)
    if not teacher or not teacher.experience_years:
        return ""
    return f"{teacher.experience_years} years"


def _date_of_joining(ctx: FieldContext) -> str:
    teacher = _teacher(ctx)
    return format_date(teacher.date_of_joining) if teacher else ""


def _employment_date(ctx: FieldContext) -> str:
    staff = _staff(ctx)
    return format_date(staff.employment_date) if staff else ""


_first_name = _user_attr("first_name")
_last_name = _user_attr("last_name")
_email = _user_attr("email")
_phone = _user_attr("phone")
_address = _user_attr("address")
_blood_group = _user_attr("blood_group")
_school_name = _school_attr("school_name", "School Name Not Set")
_school_address = _school_attr("address", "School Address Not Set")
_school_code = _school_attr("school_code", "School Code Not Set")
_student_id = _student_attr("student_id")
_roll_number = _student_attr("roll_number")
_admission_number = _student_attr("admission_number")
_class_name = _student_attr("class_name")
_section = _student_attr("section")
_employee_id = _employee_attr("employee_id")
_designation = _employee_attr("designation")
_department = _employee_attr("department")
_qualification = _teacher_attr("qualification")
_position = _staff_attr("position")
_shift = _staff_attr("shift")
_working_hours = _staff_attr("working_hours")
_teacher_photo = _photo("teacher_photo")
_student_photo = _photo("student_photo")
_staff_photo = _photo("staff_photo")


# Template field name -> resolver. Labels and their camelCase aliases
# point at the same closure.
FIELD_MAP: Dict[str, Callable[[FieldContext], str]] = {
    # Common
    "First Name": _first_name,
    "firstName": _first_name,
    "Middle Name": _user_attr("middle_name"),
    "middleName": _user_attr("middle_name"),
    "Last Name": _last_name,
    "lastName": _last_name,
    "Full Name": _full_name,
    "fullName": _full_name,
    "Email": _email,
    "email": _email,
    "Phone Number": _phone,
    "phone": _phone,
    "Address": _address,
    "address": _address,
    "Date of Birth": _date_of_birth,
    "dateOfBirth": _date_of_birth,
    "Blood Group": _blood_group,
    "bloodGroup": _blood_group,

    # School
    "School Name": _school_name,
    "schoolName": _school_name,
    "School Logo": _school_logo,
    "schoolLogo": _school_logo,
    "School Address": _school_address,
    "schoolAddress": _school_address,
    "School Code": _school_code,
    "schoolCode": _school_code,

    # Student
    "Student ID": _student_id,
    "studentId": _student_id,
    "Roll Number": _roll_number,
    "rollNumber": _roll_number,
    "Admission Number": _admission_number,
    "admissionNumber": _admission_number,
    "Class": _class_name,
    "className": _class_name,
    "Section": _section,
    "section": _section,
    "Academic Year": _academic_year,
    "academicYear": _academic_year,
    "Parent Name": _guardian_name,
    "parentName": _guardian_name,
    "Guardian Name": _guardian_name,
    "guardianName": _guardian_name,
    "Emergency Contact": _guardian_contact,
    "emergencyContact": _guardian_contact,
    "Student Photo": _student_photo,
    "studentPhoto": _student_photo,

    # Teacher
    "Employee ID": _employee_id,
    "employeeId": _employee_id,
    "Teacher ID": _employee_id,
    "teacherId": _employee_id,
    "Designation": _designation,
    "designation": _designation,
    "Department": _department,
    "department": _department,
    "Subject Taught": _subjects_taught,
    "subjectsTaught": _subjects_taught,
    "Qualification": _qualification,
    "qualification": _qualification,
    "Experience": _experience,
    "experience": _experience,
    "Date of Joining": _date_of_joining,
    "dateOfJoining": _date_of_joining,
    "Teacher Photo": _teacher_photo,
    "teacherPhoto": _teacher_photo,
    "photo": _teacher_photo,
    "profilePicture": _photo("profilePicture"),

    # Staff
    "Position": _position,
    "position": _position,
    "Shift": _shift,
    "shift": _shift,
    "Working Hours": _working_hours,
    "workingHours": _working_hours,
    "Employment Date": _employment_date,
    "employmentDate": _employment_date,
    "Staff Photo": _staff_photo,
    "staffPhoto": _staff_photo,
}


class FieldValueResolver:
    """Resolves the display value of one template field for one subject"""

    def __init__(self, image_base_url: Optional[str] = None, clock: Callable[[], datetime] = datetime.now):
        self.image_base_url = image_base_url
        self.clock = clock

    def resolve_database_field(
        self,
        subject: Subject,
        field_name: str,
        school: Optional[SchoolInformation] = None,
    ) -> str:
        """Value of a mapping-table entry; unknown names resolve to ''"""
        resolver = FIELD_MAP.get(field_name)
        if resolver is None:
            return ""
        ctx = FieldContext(subject, school, self.image_base_url, self.clock())
        return resolver(ctx) or ""

    def resolve(
        self,
        subject: Subject,
        field: TemplateField,
        school: Optional[SchoolInformation] = None,
    ) -> str:
        """
        Resolve a field's value

        Static fields use their text, then their image URL. Database fields
        go through FIELD_MAP. When nothing resolves, the placeholder and then
        the label are used.
        """
        value = ""
        if field.data_source == DataSource.STATIC:
            value = field.static_text or field.image_url or ""
        elif field.data_source == DataSource.DATABASE and field.database_field:
            value = self.resolve_database_field(subject, field.database_field, school)

        return value or field.placeholder or field.label or ""


def available_fields() -> List[str]:
    """Field names a template may bind to"""
    return list(FIELD_MAP.keys())
