"""
Pydantic schemas for domain records and request/response validation
"""

from cardhub.schemas.template import (
    IDCardTemplateType,
    TemplateStatus,
    TemplateFieldType,
    DataSource,
    TemplateField,
    IDCardTemplate,
    TemplateSummary,
)
from cardhub.schemas.subject import (
    UserProfile,
    StudentProfile,
    TeacherProfile,
    StaffProfile,
    UserAccount,
    StudentSubject,
    TeacherSubject,
    StaffSubject,
    Subject,
)
from cardhub.schemas.school import SchoolInformation
from cardhub.schemas.id_card import (
    IssuedCredential,
    RenderedField,
    RenderedFieldStyle,
    RenderedCard,
    IdentifierKind,
    QRPayload,
    GenerateIDCardRequest,
    BulkGenerateRequest,
    GroupTarget,
    GroupGenerateRequest,
    BulkFailure,
    BulkGenerationResult,
    IssuedCardSummary,
    IDCardListFilters,
    IDCardListResponse,
)
from cardhub.schemas.verification import (
    CredentialInfo,
    VerifiedSubject,
    VerificationResult,
    VerifyRequest,
)

__all__ = [
    "IDCardTemplateType",
    "TemplateStatus",
    "TemplateFieldType",
    "DataSource",
    "TemplateField",
    "IDCardTemplate",
    "TemplateSummary",
    "UserProfile",
    "StudentProfile",
    "TeacherProfile",
    "StaffProfile",
    "UserAccount",
    "StudentSubject",
    "TeacherSubject",
    "StaffSubject",
    "Subject",
    "SchoolInformation",
    "IssuedCredential",
    "RenderedField",
    "RenderedFieldStyle",
    "RenderedCard",
    "IdentifierKind",
    "QRPayload",
    "GenerateIDCardRequest",
    "BulkGenerateRequest",
    "GroupTarget",
    "GroupGenerateRequest",
    "BulkFailure",
    "BulkGenerationResult",
    "IssuedCardSummary",
    "IDCardListFilters",
    "IDCardListResponse",
    "CredentialInfo",
    "VerifiedSubject",
    "VerificationResult",
    "VerifyRequest",
]
