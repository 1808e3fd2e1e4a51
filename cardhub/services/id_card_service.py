"""
ID Card Service
Renders templates against subjects and issues ID cards
"""

import logging
import math
import uuid
from contextlib import nullcontext
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from cardhub.config import settings
from cardhub.exceptions import (
    CardHubError,
    NotFoundError,
    InvalidStateError,
    TypeMismatchError,
    ValidationError,
)
from cardhub.repositories.interfaces import (
    ISubjectRepository,
    ITemplateRepository,
    ICredentialRepository,
    ISchoolInformationProvider,
)
from cardhub.schemas.id_card import (
    IssuedCredential,
    IDCardListFilters,
    IDCardListResponse,
    RenderedField,
    RenderedFieldStyle,
    RenderedCard,
    GenerateIDCardRequest,
    BulkGenerateRequest,
    GroupGenerateRequest,
    GroupTarget,
    BulkFailure,
    BulkGenerationResult,
)
from cardhub.schemas.school import SchoolInformation
from cardhub.schemas.subject import (
    Subject,
    UserAccount,
    StudentSubject,
    TeacherSubject,
    StaffSubject,
)
from cardhub.schemas.template import (
    IDCardTemplate,
    IDCardTemplateType,
    TemplateField,
    TemplateFieldType,
    TemplateStatus,
    TemplateSummary,
)
from cardhub.services.field_resolver import FieldValueResolver
from cardhub.services import qr_codec

logger = logging.getLogger(__name__)

GROUP_TEMPLATE_TYPES = {
    GroupTarget.CLASS: {IDCardTemplateType.STUDENT},
    GroupTarget.ALL_TEACHERS: {IDCardTemplateType.TEACHER},
    GroupTarget.ALL_STAFF: {IDCardTemplateType.STAFF, IDCardTemplateType.STAFF_NO_LOGIN},
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IDCardService:
    """Card Renderer: template + subject -> rendered fields + issued credential"""

    def __init__(
        self,
        subjects: ISubjectRepository,
        templates: ITemplateRepository,
        credentials: ICredentialRepository,
        school: ISchoolInformationProvider,
        transaction: Optional[Callable] = None,
        resolver: Optional[FieldValueResolver] = None,
        frontend_url: Optional[str] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.subjects = subjects
        self.templates = templates
        self.credentials = credentials
        self.school = school
        self.transaction = transaction or nullcontext
        self.resolver = resolver or FieldValueResolver()
        self.frontend_url = frontend_url or settings.FRONTEND_URL
        self.clock = clock

    async def get_active_template(self, template_id: str) -> IDCardTemplate:
        template = await self.templates.get_by_id(template_id, with_fields=True)
        if not template:
            raise NotFoundError("Template not found", details={"template_id": template_id})

        if template.status != TemplateStatus.ACTIVE:
            raise InvalidStateError(
                "Template must be active to generate ID cards",
                details={"template_id": template_id, "status": template.status.value},
            )
        return template

    @staticmethod
    def build_subject(account: UserAccount, template_type: IDCardTemplateType) -> Subject:
        """Pick the sub-profile a template type needs, or raise TypeMismatchError"""
        user = account.base_profile()

        if template_type == IDCardTemplateType.STUDENT:
            if not account.student:
                raise TypeMismatchError("User is not a student", details={"subject_id": account.id})
            return StudentSubject(user=user, student=account.student)

        if template_type == IDCardTemplateType.TEACHER:
            if not account.teacher:
                raise TypeMismatchError("User is not a teacher", details={"subject_id": account.id})
            return TeacherSubject(user=user, teacher=account.teacher)

        if template_type in (IDCardTemplateType.STAFF, IDCardTemplateType.STAFF_NO_LOGIN):
            if not account.staff:
                raise TypeMismatchError("User is not staff", details={"subject_id": account.id})
            return StaffSubject(user=user, staff=account.staff)

        raise TypeMismatchError("Invalid template type", details={"template_type": str(template_type)})

    async def load_subject(self, subject_id: str, template_type: IDCardTemplateType) -> Subject:
        account = await self.subjects.get_by_id(subject_id)
        if not account:
            raise NotFoundError("User not found", details={"subject_id": subject_id})
        return self.build_subject(account, template_type)

    def render_field(
        self,
        template: IDCardTemplate,
        field: TemplateField,
        subject: Subject,
        school: Optional[SchoolInformation],
    ) -> RenderedField:
        value = self.resolver.resolve(subject, field, school)

        # The value of a QR field is the payload URL; rasterizing is done elsewhere
        if field.field_type == TemplateFieldType.QR_CODE:
            value = qr_codec.build_payload_url(
                template.type,
                field.database_field,
                subject,
                self.frontend_url,
            )

        return RenderedField(
            field_id=field.id,
            field_type=field.field_type.value,
            label=field.label,
            value=value,
            x=field.x,
            y=field.y,
            width=field.width,
            height=field.height,
            style=RenderedFieldStyle(
                font_size=field.font_size or None,
                font_family=field.font_family or None,
                font_weight=field.font_weight or None,
                text_align=field.text_align or None,
                color=field.color or None,
                background_color=field.background_color or None,
            ),
        )

    def render_fields(
        self,
        template: IDCardTemplate,
        subject: Subject,
        school: Optional[SchoolInformation],
    ) -> List[RenderedField]:
        """Render every template field in template order"""
        return [self.render_field(template, field, subject, school) for field in template.fields]

    async def issue(
        self,
        template: IDCardTemplate,
        subject_id: str,
        expiry_date: Optional[datetime] = None,
        batch_name: Optional[str] = None,
        school: Optional[SchoolInformation] = None,
    ) -> RenderedCard:
        """
        Render and persist one card for an already validated template

        All fields are resolved before anything is written. The writes
        (supersede prior card, insert new card, bump usage count) run in
        one transaction.
        """
        subject = await self.load_subject(subject_id, template.type)
        rendered_fields = self.render_fields(template, subject, school)

        issued_at = self.clock()
        credential = IssuedCredential(
            id=str(uuid.uuid4()),
            type=template.type,
            template_id=template.id,
            subject_id=subject.subject_id,
            expiry_date=expiry_date or issued_at + timedelta(days=settings.DEFAULT_CARD_VALIDITY_DAYS),
            batch_name=batch_name,
            issued_at=issued_at,
            updated_at=issued_at,
            template_name=template.name,
        )

        async with self.transaction():
            existing = await self.credentials.find_latest_by_subject(subject.subject_id, [template.type])
            if existing and existing.is_active_at(issued_at):
                await self.credentials.touch(existing.id)

            await self.credentials.create(credential)
            await self.templates.increment_usage(template.id)

        logger.info(
            "Issued ID card %s for subject %s using template %s",
            credential.id, subject.subject_id, template.id,
        )

        return self._card(credential, template, rendered_fields)

    async def generate_id_card(self, request: GenerateIDCardRequest) -> RenderedCard:
        """RenderCard(templateId, subjectId, expiryDate?, batchName?)"""
        template = await self.get_active_template(request.template_id)
        school = await self.school.get()
        return await self.issue(
            template,
            request.subject_id,
            expiry_date=request.expiry_date,
            batch_name=request.batch_name,
            school=school,
        )

    async def _issue_many(
        self,
        template: IDCardTemplate,
        subject_ids: List[str],
        expiry_date: Optional[datetime],
        batch_name: Optional[str],
    ) -> BulkGenerationResult:
        school = await self.school.get()
        result = BulkGenerationResult(total_processed=len(subject_ids))

        for subject_id in subject_ids:
            try:
                card = await self.issue(template, subject_id, expiry_date, batch_name, school)
            except CardHubError as e:
                logger.warning("Skipping subject %s in bulk issuance: %s", subject_id, e.message)
                result.failed.append(BulkFailure(subject_id=subject_id, error=e.message))
                continue
            except Exception as e:
                logger.exception("Unexpected error issuing ID card for subject %s", subject_id)
                result.failed.append(BulkFailure(subject_id=subject_id, error=str(e) or "Unknown error"))
                continue
            result.successful.append(card)

        result.success_count = len(result.successful)
        result.failure_count = len(result.failed)
        return result

    async def generate_bulk(self, request: BulkGenerateRequest) -> BulkGenerationResult:
        """
        Issue cards for many subjects

        Template problems abort the whole batch; a failing subject is recorded
        in `failed` and the batch carries on.
        """
        if len(request.subject_ids) > settings.BULK_MAX_SUBJECTS:
            raise ValidationError(
                f"At most {settings.BULK_MAX_SUBJECTS} subjects can be issued in one batch",
                details={"requested": len(request.subject_ids)},
            )

        template = await self.get_active_template(request.template_id)
        return await self._issue_many(template, request.subject_ids, request.expiry_date, request.batch_name)

    async def generate_for_group(self, request: GroupGenerateRequest) -> BulkGenerationResult:
        """Issue cards for a whole class, all teachers, or all staff"""
        template = await self.get_active_template(request.template_id)

        if template.type not in GROUP_TEMPLATE_TYPES[request.target]:
            raise TypeMismatchError(
                f"Template of type {template.type.value} cannot be used for {request.target.value}",
                details={"template_type": template.type.value, "target": request.target.value},
            )

        if request.target == GroupTarget.CLASS:
            if not request.class_id:
                raise ValidationError("Class ID is required for class bulk generation")
            subject_ids = await self.subjects.list_class_student_ids(request.class_id)
        elif request.target == GroupTarget.ALL_TEACHERS:
            subject_ids = await self.subjects.list_teacher_ids()
        else:
            subject_ids = await self.subjects.list_staff_ids()

        return await self._issue_many(template, subject_ids, request.expiry_date, request.batch_name)

    async def get_id_card(self, credential_id: str) -> RenderedCard:
        """Re-render an issued card from current data; nothing is written"""
        credential = await self.credentials.get_by_id(credential_id)
        if not credential:
            raise NotFoundError("ID card not found", details={"id": credential_id})

        template = await self.templates.get_by_id(credential.template_id, with_fields=True)
        if not template:
            raise NotFoundError("Template not found", details={"template_id": credential.template_id})

        subject = await self.load_subject(credential.subject_id, template.type)
        school = await self.school.get()
        return self._card(credential, template, self.render_fields(template, subject, school))

    async def list_subject_id_cards(self, subject_id: str) -> List[IssuedCredential]:
        return await self.credentials.list_by_subject(subject_id)

    async def list_id_cards(self, filters: IDCardListFilters) -> IDCardListResponse:
        """Page through every issued card, optionally narrowed by type, activity or holder"""
        now = self.clock()
        id_cards, total = await self.credentials.search(filters, now)
        for card in id_cards:
            card.is_active = card.is_active_at(now)

        return IDCardListResponse(
            id_cards=id_cards,
            total=total,
            page=filters.page,
            limit=filters.limit,
            total_pages=math.ceil(total / filters.limit),
        )

    @staticmethod
    def _card(
        credential: IssuedCredential,
        template: IDCardTemplate,
        rendered_fields: List[RenderedField],
    ) -> RenderedCard:
        return RenderedCard(
            id=credential.id,
            template_id=template.id,
            subject_id=credential.subject_id,
            rendered_fields=rendered_fields,
            expiry_date=credential.expiry_date,
            issued_at=credential.issued_at,
            template=TemplateSummary(
                name=template.name,
                dimensions=template.dimensions,
                orientation=template.orientation,
            ),
        )
