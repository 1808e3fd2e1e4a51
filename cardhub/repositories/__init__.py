"""
Repositories
Persistence collaborators of the ID card engine
"""

from cardhub.repositories.interfaces import (
    ISubjectRepository,
    ITemplateRepository,
    ICredentialRepository,
    ISchoolInformationProvider,
)
from cardhub.repositories.subject_repository import SubjectRepository
from cardhub.repositories.template_repository import TemplateRepository
from cardhub.repositories.credential_repository import CredentialRepository
from cardhub.repositories.school_repository import SchoolInformationRepository

__all__ = [
    "ISubjectRepository",
    "ITemplateRepository",
    "ICredentialRepository",
    "ISchoolInformationProvider",
    "SubjectRepository",
    "TemplateRepository",
    "CredentialRepository",
    "SchoolInformationRepository",
]
