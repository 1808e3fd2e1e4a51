"""
QR Verification Request/Response Models
"""

from pydantic import BaseModel, Field
from typing import Optional, Any, Dict


class CredentialInfo(BaseModel):
    """Most recent ID card of the verified subject"""
    template_name: str = "Unknown"
    issued_at: str = ""
    expiry_date: str = ""
    is_active: bool = True


class VerifiedSubject(BaseModel):
    """Normalized view of whoever the QR code belongs to"""
    subject_id: str
    subject_type: str = Field(..., description="student, teacher or staff")
    display_name: str
    identifier: str = Field(..., description="Identifier used for the lookup (student ID, employee ID, ...)")
    photo_url: Optional[str] = None
    type_specific_info: Dict[str, Any] = Field(default_factory=dict)
    credential_info: CredentialInfo


class VerificationResult(BaseModel):
    """Answer to: who does this QR code belong to, and is it still valid"""
    valid: bool
    subject: Optional[VerifiedSubject] = None
    error: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "valid": False,
                "error": "Invalid QR code format"
            }
        }


class VerifyRequest(BaseModel):
    """Scanned QR text"""
    qr_data: str = Field(..., description="Text read from the QR code")
