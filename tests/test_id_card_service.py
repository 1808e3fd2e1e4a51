"""Tests for card rendering and issuance."""

import pytest
from datetime import datetime, timedelta, timezone

from cardhub.config import settings
from cardhub.exceptions import (
    NotFoundError,
    InvalidStateError,
    TypeMismatchError,
    ValidationError,
)
from cardhub.schemas.id_card import (
    GenerateIDCardRequest,
    BulkGenerateRequest,
    GroupGenerateRequest,
    GroupTarget,
    IDCardListFilters,
    IssuedCredential,
)
from cardhub.schemas.subject import UserAccount, StudentProfile
from cardhub.schemas.template import IDCardTemplateType, TemplateStatus
from cardhub.services.field_resolver import FieldValueResolver
from tests.conftest import NOW, FRONTEND


def _values(card) -> dict:
    return {f.field_id: f.value for f in card.rendered_fields}


class TestGenerateIDCard:

    @pytest.mark.asyncio
    async def test_student_card_qr_payload(self, id_card_service):
        """QR field bound to studentId renders the student verification URL."""
        card = await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )

        values = _values(card)
        assert values["f-qr"] == f"{FRONTEND}/verify/student/STU100"
        assert values["f-name"] == "Asha Verma"
        assert values["f-school"] == "Green Valley School"
        assert values["f-title"] == "IDENTITY CARD"
        assert card.subject_id == "S1"
        assert card.template.name == "Student Card"
        assert card.template.dimensions == "85.6x54"

    @pytest.mark.asyncio
    async def test_rendered_fields_keep_template_order_and_geometry(self, id_card_service, student_template):
        card = await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )

        assert [f.field_id for f in card.rendered_fields] == [f.id for f in student_template.fields]
        name = card.rendered_fields[0]
        assert (name.x, name.y, name.width, name.height) == (10, 10, 120, 12)
        assert name.style.font_size == 12
        assert name.style.color == "#000000"
        assert name.field_type == "TEXT"

    @pytest.mark.asyncio
    async def test_default_expiry(self, id_card_service, credentials):
        card = await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )

        assert card.issued_at == NOW
        assert card.expiry_date == NOW + timedelta(days=365)
        assert credentials.credentials[0].expiry_date == NOW + timedelta(days=365)

    @pytest.mark.asyncio
    async def test_explicit_expiry_and_batch(self, id_card_service, credentials):
        expiry = datetime(2026, 6, 30, tzinfo=timezone.utc)
        await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-teacher", subject_id="T1", expiry_date=expiry, batch_name="2025")
        )

        stored = credentials.credentials[0]
        assert stored.expiry_date == expiry
        assert stored.batch_name == "2025"
        assert stored.type == IDCardTemplateType.TEACHER
        assert stored.template_id == "tpl-teacher"

    @pytest.mark.asyncio
    async def test_draft_template_rejected(self, id_card_service, templates, credentials):
        templates.templates["tpl-student"].status = TemplateStatus.DRAFT

        with pytest.raises(InvalidStateError) as exc_info:
            await id_card_service.generate_id_card(
                GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
            )

        assert exc_info.value.message == "Template must be active to generate ID cards"
        assert credentials.credentials == []

    @pytest.mark.asyncio
    async def test_missing_template(self, id_card_service):
        with pytest.raises(NotFoundError) as exc_info:
            await id_card_service.generate_id_card(
                GenerateIDCardRequest(template_id="missing", subject_id="S1")
            )
        assert exc_info.value.message == "Template not found"

    @pytest.mark.asyncio
    async def test_missing_subject(self, id_card_service):
        with pytest.raises(NotFoundError) as exc_info:
            await id_card_service.generate_id_card(
                GenerateIDCardRequest(template_id="tpl-student", subject_id="nobody")
            )
        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("template_id, subject_id, message", [
        ("tpl-student", "T1", "User is not a student"),
        ("tpl-teacher", "S1", "User is not a teacher"),
        ("tpl-staff", "T1", "User is not staff"),
    ])
    async def test_type_mismatch(self, id_card_service, credentials, templates, template_id, subject_id, message):
        with pytest.raises(TypeMismatchError) as exc_info:
            await id_card_service.generate_id_card(
                GenerateIDCardRequest(template_id=template_id, subject_id=subject_id)
            )

        assert exc_info.value.message == message
        assert credentials.credentials == []
        assert templates.templates[template_id].usage_count == 0

    @pytest.mark.asyncio
    async def test_usage_count_incremented(self, id_card_service, templates):
        for _ in range(3):
            await id_card_service.generate_id_card(
                GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
            )
        assert templates.templates["tpl-student"].usage_count == 3

    @pytest.mark.asyncio
    async def test_writes_run_in_one_transaction(self, id_card_service, transaction):
        await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )
        assert transaction.entered == 1
        assert transaction.rolled_back == 0


class TestSupersede:

    @pytest.mark.asyncio
    async def test_active_prior_card_is_touched(self, id_card_service, credentials):
        first = await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )
        second = await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )

        assert credentials.touched == [first.id]
        assert first.id != second.id
        assert len(credentials.credentials) == 2

    @pytest.mark.asyncio
    async def test_expired_prior_card_is_left_alone(self, id_card_service, credentials):
        credentials.credentials.append(IssuedCredential(
            id="old",
            type=IDCardTemplateType.STUDENT,
            template_id="tpl-student",
            subject_id="S1",
            expiry_date=NOW - timedelta(days=1),
            issued_at=NOW - timedelta(days=366),
        ))

        await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )

        assert credentials.touched == []

    @pytest.mark.asyncio
    async def test_other_type_not_touched(self, id_card_service, credentials):
        credentials.credentials.append(IssuedCredential(
            id="student-card",
            type=IDCardTemplateType.STUDENT,
            template_id="tpl-student",
            subject_id="T1",
            issued_at=NOW - timedelta(days=2),
        ))

        await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-teacher", subject_id="T1")
        )

        assert credentials.touched == []


class TestNoPartialWrites:

    @pytest.mark.asyncio
    async def test_resolution_failure_writes_nothing(self, id_card_service, credentials, templates):
        class BrokenResolver(FieldValueResolver):
            def resolve(self, subject, field, school=None):
                if field.id == "f-title":
                    raise RuntimeError("cannot resolve")
                return super().resolve(subject, field, school)

        id_card_service.resolver = BrokenResolver()

        with pytest.raises(RuntimeError):
            await id_card_service.generate_id_card(
                GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
            )

        assert credentials.credentials == []
        assert credentials.touched == []
        assert templates.templates["tpl-student"].usage_count == 0

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back_supersede(self, id_card_service, credentials, templates, transaction):
        await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )
        credentials.fail_on_create = True

        with pytest.raises(RuntimeError):
            await id_card_service.generate_id_card(
                GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
            )

        assert transaction.rolled_back == 1
        assert credentials.touched == []
        assert len(credentials.credentials) == 1
        assert templates.templates["tpl-student"].usage_count == 1


class TestBulk:

    @pytest.mark.asyncio
    async def test_bulk_reports_failures_per_subject(self, id_card_service, subjects):
        subjects.add(UserAccount(
            id="S2",
            full_name="Kiran Das",
            student=StudentProfile(id="sp-2", student_id="STU101", class_id="class-5a", roll_number="13"),
        ))

        result = await id_card_service.generate_bulk(BulkGenerateRequest(
            template_id="tpl-student",
            subject_ids=["S1", "T1", "missing", "S2"],
            batch_name="Term 1",
        ))

        assert result.total_processed == 4
        assert result.success_count == 2
        assert result.failure_count == 2
        assert [c.subject_id for c in result.successful] == ["S1", "S2"]
        assert {f.subject_id: f.error for f in result.failed} == {
            "T1": "User is not a student",
            "missing": "User not found",
        }

    @pytest.mark.asyncio
    async def test_bulk_unexpected_error_does_not_abort(self, id_card_service, credentials):
        calls = []
        original_create = credentials.create

        async def flaky_create(credential):
            calls.append(credential.subject_id)
            if len(calls) == 1:
                raise RuntimeError("connection reset")
            return await original_create(credential)

        credentials.create = flaky_create

        result = await id_card_service.generate_bulk(BulkGenerateRequest(
            template_id="tpl-student",
            subject_ids=["S1", "S1"],
        ))

        assert result.failure_count == 1
        assert result.failed[0].error == "connection reset"
        assert result.success_count == 1

    @pytest.mark.asyncio
    async def test_bulk_with_inactive_template_aborts(self, id_card_service, templates):
        templates.templates["tpl-student"].status = TemplateStatus.ARCHIVED
        with pytest.raises(InvalidStateError):
            await id_card_service.generate_bulk(BulkGenerateRequest(template_id="tpl-student", subject_ids=["S1"]))

    @pytest.mark.asyncio
    async def test_bulk_size_limit(self, id_card_service, monkeypatch):
        monkeypatch.setattr(settings, "BULK_MAX_SUBJECTS", 2)
        with pytest.raises(ValidationError):
            await id_card_service.generate_bulk(BulkGenerateRequest(
                template_id="tpl-student",
                subject_ids=["S1", "S1", "S1"],
            ))


class TestGroupGeneration:

    @pytest.mark.asyncio
    async def test_class(self, id_card_service, subjects):
        subjects.add(UserAccount(
            id="S0",
            full_name="Anu Roy",
            student=StudentProfile(id="sp-0", student_id="STU099", class_id="class-5a", roll_number="01"),
        ))
        subjects.add(UserAccount(
            id="S9",
            full_name="Other Class",
            student=StudentProfile(id="sp-9", student_id="STU900", class_id="class-6b", roll_number="02"),
        ))

        result = await id_card_service.generate_for_group(GroupGenerateRequest(
            template_id="tpl-student", target=GroupTarget.CLASS, class_id="class-5a",
        ))

        assert [c.subject_id for c in result.successful] == ["S0", "S1"]
        assert result.failure_count == 0

    @pytest.mark.asyncio
    async def test_class_requires_class_id(self, id_card_service):
        with pytest.raises(ValidationError) as exc_info:
            await id_card_service.generate_for_group(GroupGenerateRequest(
                template_id="tpl-student", target=GroupTarget.CLASS,
            ))
        assert exc_info.value.message == "Class ID is required for class bulk generation"

    @pytest.mark.asyncio
    async def test_all_teachers(self, id_card_service):
        result = await id_card_service.generate_for_group(GroupGenerateRequest(
            template_id="tpl-teacher", target=GroupTarget.ALL_TEACHERS,
        ))
        assert [c.subject_id for c in result.successful] == ["T1"]
        assert _values(result.successful[0])["f-qr"] == f"{FRONTEND}/verify/employee/E42"

    @pytest.mark.asyncio
    async def test_all_staff(self, id_card_service):
        result = await id_card_service.generate_for_group(GroupGenerateRequest(
            template_id="tpl-staff", target=GroupTarget.ALL_STAFF,
        ))
        assert [c.subject_id for c in result.successful] == ["ST1"]
        assert _values(result.successful[0])["f-qr"] == f"{FRONTEND}/verify/staff/ST1"

    @pytest.mark.asyncio
    async def test_template_type_must_match_target(self, id_card_service):
        with pytest.raises(TypeMismatchError):
            await id_card_service.generate_for_group(GroupGenerateRequest(
                template_id="tpl-student", target=GroupTarget.ALL_TEACHERS,
            ))


class TestLookups:

    @pytest.mark.asyncio
    async def test_get_id_card_re_renders_without_writes(self, id_card_service, credentials, templates):
        issued = await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )

        card = await id_card_service.get_id_card(issued.id)

        assert card.id == issued.id
        assert _values(card) == _values(issued)
        assert len(credentials.credentials) == 1
        assert templates.templates["tpl-student"].usage_count == 1

    @pytest.mark.asyncio
    async def test_get_missing_id_card(self, id_card_service):
        with pytest.raises(NotFoundError):
            await id_card_service.get_id_card("nope")

    @pytest.mark.asyncio
    async def test_list_subject_id_cards_newest_first(self, id_card_service, credentials):
        credentials.credentials.append(IssuedCredential(
            id="old",
            type=IDCardTemplateType.STUDENT,
            template_id="tpl-student",
            subject_id="S1",
            issued_at=NOW - timedelta(days=30),
        ))
        issued = await id_card_service.generate_id_card(
            GenerateIDCardRequest(template_id="tpl-student", subject_id="S1")
        )

        cards = await id_card_service.list_subject_id_cards("S1")

        assert [c.id for c in cards] == [issued.id, "old"]


def _issued(card_id, card_type, subject_id, days_ago, expires_in_days=None) -> IssuedCredential:
    return IssuedCredential(
        id=card_id,
        type=card_type,
        template_id="tpl",
        subject_id=subject_id,
        issued_at=NOW - timedelta(days=days_ago),
        expiry_date=NOW + timedelta(days=expires_in_days) if expires_in_days is not None else None,
    )


class TestListIDCards:

    @pytest.fixture(autouse=True)
    def seeded(self, credentials):
        credentials.credentials.extend([
            _issued("c-student", IDCardTemplateType.STUDENT, "S1", days_ago=1, expires_in_days=300),
            _issued("c-teacher", IDCardTemplateType.TEACHER, "T1", days_ago=2),
            _issued("c-staff-old", IDCardTemplateType.STAFF, "ST1", days_ago=400, expires_in_days=-35),
            _issued("c-staff", IDCardTemplateType.STAFF, "ST1", days_ago=3, expires_in_days=362),
        ])

    @pytest.mark.asyncio
    async def test_defaults_list_newest_first(self, id_card_service):
        result = await id_card_service.list_id_cards(IDCardListFilters())

        assert [c.id for c in result.id_cards] == ["c-student", "c-teacher", "c-staff", "c-staff-old"]
        assert result.total == 4
        assert result.page == 1
        assert result.limit == 10
        assert result.total_pages == 1

    @pytest.mark.asyncio
    async def test_holder_and_activity_are_filled_in(self, id_card_service):
        result = await id_card_service.list_id_cards(IDCardListFilters())
        cards = {c.id: c for c in result.id_cards}

        assert cards["c-teacher"].holder_name == "Meera Nair"
        assert cards["c-teacher"].holder_email == "meera@example.com"
        assert cards["c-staff"].holder_name == "Joseph K Mathew"
        assert cards["c-staff"].is_active is True
        assert cards["c-staff-old"].is_active is False

    @pytest.mark.asyncio
    async def test_pagination(self, id_card_service):
        result = await id_card_service.list_id_cards(IDCardListFilters(page=2, limit=3))

        assert [c.id for c in result.id_cards] == ["c-staff-old"]
        assert result.total == 4
        assert result.page == 2
        assert result.total_pages == 2

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, id_card_service):
        result = await id_card_service.list_id_cards(IDCardListFilters(page=5, limit=3))

        assert result.id_cards == []
        assert result.total == 4

    @pytest.mark.asyncio
    async def test_type_filter(self, id_card_service):
        result = await id_card_service.list_id_cards(IDCardListFilters(type=IDCardTemplateType.STAFF))

        assert [c.id for c in result.id_cards] == ["c-staff", "c-staff-old"]
        assert result.total == 2

    @pytest.mark.parametrize("is_active,expected", [
        (True, ["c-student", "c-teacher", "c-staff"]),
        (False, ["c-staff-old"]),
    ])
    @pytest.mark.asyncio
    async def test_activity_filter(self, id_card_service, is_active, expected):
        result = await id_card_service.list_id_cards(IDCardListFilters(is_active=is_active))

        assert [c.id for c in result.id_cards] == expected
        assert all(c.is_active is is_active for c in result.id_cards)

    @pytest.mark.parametrize("search,expected", [
        ("asha", ["c-student"]),
        ("MEERA@", ["c-teacher"]),
        ("k mathew", ["c-staff", "c-staff-old"]),
        ("nobody", []),
    ])
    @pytest.mark.asyncio
    async def test_search_matches_name_or_email(self, id_card_service, search, expected):
        result = await id_card_service.list_id_cards(IDCardListFilters(search=search))

        assert [c.id for c in result.id_cards] == expected
        assert result.total == len(expected)

    @pytest.mark.asyncio
    async def test_empty_listing_has_no_pages(self, id_card_service, credentials):
        credentials.credentials.clear()

        result = await id_card_service.list_id_cards(IDCardListFilters())

        assert result.id_cards == []
        assert result.total == 0
        assert result.total_pages == 0

    def test_filters_reject_oversized_page(self):
        with pytest.raises(ValueError):
            IDCardListFilters(limit=101)
