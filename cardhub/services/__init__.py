"""
Services
"""

from cardhub.services.field_resolver import FieldValueResolver, FieldContext, available_fields
from cardhub.services.id_card_service import IDCardService
from cardhub.services.qr_verification_service import QRVerificationService

__all__ = [
    "FieldValueResolver",
    "FieldContext",
    "available_fields",
    "IDCardService",
    "QRVerificationService",
]
