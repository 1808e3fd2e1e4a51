"""
Service Dependencies
Wires the SQL repositories into the services used by the routes
"""

from cardhub.database import database
from cardhub.repositories import (
    SubjectRepository,
    TemplateRepository,
    CredentialRepository,
    SchoolInformationRepository,
)
from cardhub.services.id_card_service import IDCardService
from cardhub.services.qr_verification_service import QRVerificationService


def get_id_card_service() -> IDCardService:
    """FastAPI dependency for the card renderer"""
    return IDCardService(
        subjects=SubjectRepository(database),
        templates=TemplateRepository(database),
        credentials=CredentialRepository(database),
        school=SchoolInformationRepository(database),
        transaction=database.transaction,
    )


def get_verification_service() -> QRVerificationService:
    """FastAPI dependency for QR verification"""
    return QRVerificationService(
        subjects=SubjectRepository(database),
        credentials=CredentialRepository(database),
    )
