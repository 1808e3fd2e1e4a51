"""
Subject Models
Students, teachers and staff sharing a base user profile
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Union, Literal, Annotated
from datetime import date, datetime

DateLike = Optional[Union[datetime, date, str]]


class UserProfile(BaseModel):
    """Base profile every subject owns"""
    id: str
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: DateLike = None
    blood_group: Optional[str] = None

    class Config:
        from_attributes = True


class StudentProfile(BaseModel):
    id: str
    student_id: Optional[str] = None
    roll_number: Optional[str] = None
    admission_number: Optional[str] = None
    class_id: Optional[str] = None
    class_name: Optional[str] = None
    section: Optional[str] = None
    academic_status: Optional[str] = None
    father_first_name: Optional[str] = None
    father_last_name: Optional[str] = None
    father_phone: Optional[str] = None
    mother_first_name: Optional[str] = None
    mother_last_name: Optional[str] = None
    mother_phone: Optional[str] = None
    profile_photo_url: Optional[str] = None


class TeacherProfile(BaseModel):
    id: str
    employee_id: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    subjects_taught: List[str] = Field(default_factory=list)
    qualification: Optional[str] = None
    experience_years: Optional[int] = None
    date_of_joining: DateLike = None
    profile_photo_url: Optional[str] = None


class StaffProfile(BaseModel):
    id: str
    employee_id: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    shift: Optional[str] = None
    working_hours: Optional[str] = None
    employment_date: DateLike = None
    profile_photo_url: Optional[str] = None


class UserAccount(UserProfile):
    """A user as stored, with whichever sub-profiles exist"""
    student: Optional[StudentProfile] = None
    teacher: Optional[TeacherProfile] = None
    staff: Optional[StaffProfile] = None

    def base_profile(self) -> UserProfile:
        return UserProfile.model_validate(self.model_dump(exclude={"student", "teacher", "staff"}))


class StudentSubject(BaseModel):
    kind: Literal["student"] = "student"
    user: UserProfile
    student: StudentProfile

    @property
    def subject_id(self) -> str:
        return self.user.id

    @property
    def photo(self) -> Optional[str]:
        return self.student.profile_photo_url


class TeacherSubject(BaseModel):
    kind: Literal["teacher"] = "teacher"
    user: UserProfile
    teacher: TeacherProfile

    @property
    def subject_id(self) -> str:
        return self.user.id

    @property
    def photo(self) -> Optional[str]:
        return self.teacher.profile_photo_url


class StaffSubject(BaseModel):
    kind: Literal["staff"] = "staff"
    user: UserProfile
    staff: StaffProfile

    @property
    def subject_id(self) -> str:
        return self.user.id

    @property
    def photo(self) -> Optional[str]:
        return self.staff.profile_photo_url


# Tagged union; resolver and renderer branch on `kind`
Subject = Annotated[
    Union[StudentSubject, TeacherSubject, StaffSubject],
    Field(discriminator="kind"),
]


def display_name(user: UserProfile) -> str:
    """Full name, or first/middle/last joined when no full name is stored"""
    if user.full_name:
        return user.full_name
    parts = [user.first_name, user.middle_name, user.last_name]
    return " ".join(p for p in parts if p)
