"""
Subject Repository
Students, teachers and staff read from PostgreSQL
"""

from typing import Optional, List
from databases import Database

from cardhub.database import database as default_database
from cardhub.schemas.id_card import IdentifierKind
from cardhub.schemas.subject import (
    UserAccount,
    UserProfile,
    StudentProfile,
    TeacherProfile,
    StaffProfile,
    StudentSubject,
    TeacherSubject,
    StaffSubject,
)

USER_COLUMNS = """
    u.id::text AS user_id, u.full_name, u.first_name, u.middle_name, u.last_name,
    u.email, u.phone, u.address, u.date_of_birth, u.blood_group
"""

STUDENT_QUERY = f"""
    SELECT {USER_COLUMNS},
           s.id::text AS id, s.student_id, s.roll_number, s.admission_number,
           s.class_id::text AS class_id, c.name AS class_name, c.section,
           s.academic_status, s.father_first_name, s.father_last_name, s.father_phone,
           s.mother_first_name, s.mother_last_name, s.mother_phone, s.profile_photo_url
    FROM students s
    JOIN users u ON u.id = s.user_id
    LEFT JOIN classes c ON c.id = s.class_id
    WHERE s.deleted_at IS NULL AND u.deleted_at IS NULL
"""

TEACHER_QUERY = f"""
    SELECT {USER_COLUMNS},
           t.id::text AS id, t.employee_id, t.designation, t.department, t.subjects_taught,
           t.qualification, t.experience_years, t.date_of_joining, t.profile_photo_url
    FROM teachers t
    JOIN users u ON u.id = t.user_id
    WHERE t.deleted_at IS NULL AND u.deleted_at IS NULL
"""

STAFF_QUERY = f"""
    SELECT {USER_COLUMNS},
           st.id::text AS id, st.employee_id, st.designation, st.department, st.position,
           st.shift, st.working_hours, st.employment_date, st.profile_photo_url
    FROM staff st
    JOIN users u ON u.id = st.user_id
    WHERE st.deleted_at IS NULL AND u.deleted_at IS NULL
"""

STUDENT_LOOKUP_COLUMNS = {
    IdentifierKind.STUDENT_ID: "s.student_id",
    IdentifierKind.ROLL_NUMBER: "s.roll_number",
    IdentifierKind.ADMISSION_NUMBER: "s.admission_number",
}

USER_FIELDS = set(UserProfile.model_fields) - {"id"}


def _split_row(row) -> tuple:
    """Split a joined row into (user profile, sub-profile columns)"""
    data = dict(row)
    user = UserProfile(id=data.pop("user_id"), **{k: data.pop(k) for k in list(data) if k in USER_FIELDS})
    return user, data


class SubjectRepository:
    """SQL access to subjects; soft-deleted rows are excluded everywhere"""

    def __init__(self, db: Database = default_database):
        self._db = db

    async def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        user = await self._db.fetch_one(
            """
            SELECT id::text AS id, full_name, first_name, middle_name, last_name,
                   email, phone, address, date_of_birth, blood_group
            FROM users
            WHERE id::text = :user_id AND deleted_at IS NULL
            """,
            {"user_id": user_id}
        )
        if not user:
            return None

        student = await self._db.fetch_one(f"{STUDENT_QUERY} AND u.id::text = :user_id", {"user_id": user_id})
        teacher = await self._db.fetch_one(f"{TEACHER_QUERY} AND u.id::text = :user_id", {"user_id": user_id})
        staff = await self._db.fetch_one(f"{STAFF_QUERY} AND u.id::text = :user_id", {"user_id": user_id})

        return UserAccount(
            **dict(user),
            student=StudentProfile(**_split_row(student)[1]) if student else None,
            teacher=TeacherProfile(**_split_row(teacher)[1]) if teacher else None,
            staff=StaffProfile(**_split_row(staff)[1]) if staff else None,
        )

    async def find_student(self, kind: IdentifierKind, value: str) -> Optional[StudentSubject]:
        column = STUDENT_LOOKUP_COLUMNS.get(kind)
        if column is None:
            return None

        row = await self._db.fetch_one(
            f"{STUDENT_QUERY} AND {column} = :value LIMIT 1",
            {"value": value}
        )
        if not row:
            return None
        user, data = _split_row(row)
        return StudentSubject(user=user, student=StudentProfile(**data))

    async def find_teacher(self, identifier: str) -> Optional[TeacherSubject]:
        row = await self._db.fetch_one(
            f"{TEACHER_QUERY} AND (t.employee_id = :identifier OR u.id::text = :identifier) LIMIT 1",
            {"identifier": identifier}
        )
        if not row:
            return None
        user, data = _split_row(row)
        data["subjects_taught"] = list(data.get("subjects_taught") or [])
        return TeacherSubject(user=user, teacher=TeacherProfile(**data))

    async def find_staff(self, identifier: str) -> Optional[StaffSubject]:
        row = await self._db.fetch_one(
            f"{STAFF_QUERY} AND (st.employee_id = :identifier OR u.id::text = :identifier) LIMIT 1",
            {"identifier": identifier}
        )
        if not row:
            return None
        user, data = _split_row(row)
        return StaffSubject(user=user, staff=StaffProfile(**data))

    async def list_class_student_ids(self, class_id: str) -> List[str]:
        rows = await self._db.fetch_all(
            """
            SELECT s.user_id::text AS user_id
            FROM students s
            JOIN users u ON u.id = s.user_id
            WHERE s.class_id::text = :class_id
              AND s.deleted_at IS NULL AND u.deleted_at IS NULL
            ORDER BY s.roll_number
            """,
            {"class_id": class_id}
        )
        return [row["user_id"] for row in rows]

    async def list_teacher_ids(self) -> List[str]:
        rows = await self._db.fetch_all(
            """
            SELECT t.user_id::text AS user_id
            FROM teachers t
            JOIN users u ON u.id = t.user_id
            WHERE t.is_active = TRUE AND t.deleted_at IS NULL AND u.deleted_at IS NULL
            ORDER BY t.employee_id
            """
        )
        return [row["user_id"] for row in rows]

    async def list_staff_ids(self) -> List[str]:
        rows = await self._db.fetch_all(
            """
            SELECT st.user_id::text AS user_id
            FROM staff st
            JOIN users u ON u.id = st.user_id
            WHERE st.is_active = TRUE AND st.deleted_at IS NULL AND u.deleted_at IS NULL
            ORDER BY st.employee_id
            """
        )
        return [row["user_id"] for row in rows]
