"""
ID Card Request/Response Models
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, timezone
from enum import Enum

from cardhub.schemas.template import IDCardTemplateType, TemplateSummary


class IssuedCredential(BaseModel):
    """Persisted record of one card generation event"""
    id: str
    type: IDCardTemplateType
    template_id: str
    subject_id: str
    expiry_date: Optional[datetime] = None
    batch_name: Optional[str] = None
    issued_at: datetime
    updated_at: Optional[datetime] = None
    template_name: Optional[str] = None

    class Config:
        from_attributes = True

    def is_active_at(self, now: datetime) -> bool:
        """A card is active until its expiry date; no expiry means always active"""
        if self.expiry_date is None:
            return True
        expiry = self.expiry_date
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return expiry > now


class IssuedCardSummary(IssuedCredential):
    """Issued card as shown in the card listing"""
    holder_name: Optional[str] = None
    holder_email: Optional[str] = None
    is_active: bool = True


class IDCardListFilters(BaseModel):
    """Filters and paging for the issued card listing"""
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    type: Optional[IDCardTemplateType] = None
    search: Optional[str] = Field(default=None, description="Matches holder name or email, case-insensitive")
    is_active: Optional[bool] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class IDCardListResponse(BaseModel):
    id_cards: List[IssuedCardSummary]
    total: int
    page: int
    limit: int
    total_pages: int


class RenderedFieldStyle(BaseModel):
    font_size: Optional[int] = None
    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    text_align: Optional[str] = None
    color: Optional[str] = None
    background_color: Optional[str] = None


class RenderedField(BaseModel):
    """Computed value, geometry and style for one template field"""
    field_id: str
    field_type: str
    label: str
    value: str
    x: float
    y: float
    width: float
    height: float
    style: RenderedFieldStyle


class RenderedCard(BaseModel):
    """Geometry and value descriptor handed to the rasterizer"""
    id: str
    template_id: str
    subject_id: str
    rendered_fields: List[RenderedField]
    expiry_date: Optional[datetime] = None
    issued_at: datetime
    template: TemplateSummary


class IdentifierKind(str, Enum):
    """Which identifier a QR payload carries"""
    STUDENT_ID = "studentId"
    ROLL_NUMBER = "rollNumber"
    ADMISSION_NUMBER = "admissionNumber"
    EMPLOYEE_ID = "employeeId"


class QRPayload(BaseModel):
    """Decoded content of a verification URL"""
    subject_type: str
    identifier_kind: IdentifierKind
    identifier_value: str


class GenerateIDCardRequest(BaseModel):
    """Render and issue one card"""
    template_id: str = Field(..., min_length=1)
    subject_id: str = Field(..., min_length=1, description="User ID of the card holder")
    expiry_date: Optional[datetime] = Field(default=None, description="Defaults to issue time + 365 days")
    batch_name: Optional[str] = Field(default=None, max_length=100)


class BulkGenerateRequest(BaseModel):
    """Render and issue cards for a list of subjects"""
    template_id: str = Field(..., min_length=1)
    subject_ids: List[str] = Field(..., min_length=1)
    expiry_date: Optional[datetime] = None
    batch_name: Optional[str] = Field(default=None, max_length=100)


class GroupTarget(str, Enum):
    """Groups that can be issued in one go"""
    CLASS = "class"
    ALL_TEACHERS = "all-teachers"
    ALL_STAFF = "all-staff"


class GroupGenerateRequest(BaseModel):
    """Render and issue cards for every member of a group"""
    template_id: str = Field(..., min_length=1)
    target: GroupTarget
    class_id: Optional[str] = Field(default=None, description="Required when target is 'class'")
    expiry_date: Optional[datetime] = None
    batch_name: Optional[str] = Field(default=None, max_length=100)


class BulkFailure(BaseModel):
    subject_id: str
    error: str


class BulkGenerationResult(BaseModel):
    """Per-subject outcome of a bulk issuance"""
    successful: List[RenderedCard] = Field(default_factory=list)
    failed: List[BulkFailure] = Field(default_factory=list)
    total_processed: int = 0
    success_count: int = 0
    failure_count: int = 0


class AvailableFieldsResponse(BaseModel):
    """Database field names a template may bind to"""
    fields: List[str]
