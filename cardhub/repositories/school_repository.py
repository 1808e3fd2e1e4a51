"""
School Information Provider
"""

from typing import Optional
from databases import Database

from cardhub.database import database as default_database
from cardhub.schemas.school import SchoolInformation


class SchoolInformationRepository:

    def __init__(self, db: Database = default_database):
        self._db = db

    async def get(self) -> Optional[SchoolInformation]:
        row = await self._db.fetch_one(
            """
            SELECT school_name, logo, address, school_code
            FROM school_information
            ORDER BY created_at
            LIMIT 1
            """
        )
        return SchoolInformation(**dict(row)) if row else None
