"""
ID Card Template Models
"""

from pydantic import BaseModel, Field, AliasChoices
from typing import Optional, List
from enum import Enum


class IDCardTemplateType(str, Enum):
    """Which kind of subject a template is designed for"""
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    STAFF = "STAFF"
    STAFF_NO_LOGIN = "STAFF_NO_LOGIN"


class TemplateStatus(str, Enum):
    """Template lifecycle status"""
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class TemplateFieldType(str, Enum):
    """Type of field placed on the card"""
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    LOGO = "LOGO"
    QR_CODE = "QR_CODE"
    BARCODE = "BARCODE"
    SHAPE = "SHAPE"
    LINE = "LINE"


class DataSource(str, Enum):
    """Where a field takes its value from"""
    DATABASE = "database"
    STATIC = "static"


class TemplateField(BaseModel):
    """A positioned field on an ID card template"""
    id: str
    field_type: TemplateFieldType = Field(
        ...,
        validation_alias=AliasChoices("field_type", "fieldType"),
    )
    data_source: DataSource = Field(
        default=DataSource.STATIC,
        validation_alias=AliasChoices("data_source", "dataSource"),
    )
    database_field: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("database_field", "databaseField"),
        description="Key into the field mapping table (label or camelCase alias)"
    )
    static_text: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("static_text", "staticText"),
    )
    image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("image_url", "imageUrl"),
    )
    placeholder: Optional[str] = None
    label: str = ""

    # Geometry in template units
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    # Style
    font_size: Optional[int] = Field(default=None, validation_alias=AliasChoices("font_size", "fontSize"))
    font_family: Optional[str] = Field(default=None, validation_alias=AliasChoices("font_family", "fontFamily"))
    font_weight: Optional[str] = Field(default=None, validation_alias=AliasChoices("font_weight", "fontWeight"))
    text_align: Optional[str] = Field(default=None, validation_alias=AliasChoices("text_align", "textAlign"))
    color: Optional[str] = None
    background_color: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("background_color", "backgroundColor"),
    )

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "f-qr",
                "field_type": "QR_CODE",
                "data_source": "database",
                "database_field": "studentId",
                "label": "QR",
                "x": 250,
                "y": 20,
                "width": 80,
                "height": 80
            }
        }


class IDCardTemplate(BaseModel):
    """ID card template with its fields in render order"""
    id: str
    name: str
    type: IDCardTemplateType
    status: TemplateStatus = TemplateStatus.DRAFT
    dimensions: str = "85.6x54"
    orientation: str = "HORIZONTAL"
    fields: List[TemplateField] = Field(default_factory=list)
    usage_count: int = 0

    class Config:
        from_attributes = True


class TemplateSummary(BaseModel):
    """Template details echoed on a rendered card"""
    name: str
    dimensions: str
    orientation: str
