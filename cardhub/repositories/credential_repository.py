"""
Credential Repository
Issued ID card records
"""

from datetime import datetime
from typing import Optional, List, Sequence, Tuple
from databases import Database

from cardhub.database import database as default_database
from cardhub.schemas.id_card import IssuedCredential, IssuedCardSummary, IDCardListFilters
from cardhub.schemas.template import IDCardTemplateType

CREDENTIAL_COLUMNS = """
    c.id::text AS id, c.type, c.template_id::text AS template_id,
    c.issued_for_id::text AS subject_id, c.expiry_date, c.batch_name,
    c.issued_at, c.updated_at, t.name AS template_name
"""

HOLDER_NAME = "COALESCE(u.full_name, CONCAT_WS(' ', u.first_name, u.middle_name, u.last_name))"


def _type_filter(types: Sequence[IDCardTemplateType]) -> Tuple[str, dict]:
    """Build `c.type IN (...)` with one bind parameter per type"""
    params = {f"type_{i}": IDCardTemplateType(t).value for i, t in enumerate(types)}
    placeholders = ", ".join(f":{name}" for name in params)
    return f"c.type IN ({placeholders})", params


class CredentialRepository:
    """SQL access to issued ID cards"""

    def __init__(self, db: Database = default_database):
        self._db = db

    async def create(self, credential: IssuedCredential) -> IssuedCredential:
        await self._db.execute(
            """
            INSERT INTO id_cards
            (id, type, template_id, issued_for_id, expiry_date, batch_name, issued_at, updated_at)
            VALUES (:id, :type, :template_id, :subject_id, :expiry_date, :batch_name, :issued_at, :issued_at)
            """,
            {
                "id": credential.id,
                "type": credential.type.value,
                "template_id": credential.template_id,
                "subject_id": credential.subject_id,
                "expiry_date": credential.expiry_date,
                "batch_name": credential.batch_name,
                "issued_at": credential.issued_at,
            }
        )
        return credential

    async def touch(self, credential_id: str) -> None:
        await self._db.execute(
            "UPDATE id_cards SET updated_at = NOW() WHERE id::text = :credential_id",
            {"credential_id": credential_id}
        )

    async def get_by_id(self, credential_id: str) -> Optional[IssuedCredential]:
        row = await self._db.fetch_one(
            f"""
            SELECT {CREDENTIAL_COLUMNS}
            FROM id_cards c
            LEFT JOIN id_card_templates t ON t.id = c.template_id
            WHERE c.id::text = :credential_id
            """,
            {"credential_id": credential_id}
        )
        return IssuedCredential(**dict(row)) if row else None

    async def find_latest_by_subject(
        self,
        subject_id: str,
        types: Sequence[IDCardTemplateType],
    ) -> Optional[IssuedCredential]:
        if not types:
            return None

        type_clause, params = _type_filter(types)
        row = await self._db.fetch_one(
            f"""
            SELECT {CREDENTIAL_COLUMNS}
            FROM id_cards c
            LEFT JOIN id_card_templates t ON t.id = c.template_id
            WHERE c.issued_for_id::text = :subject_id AND {type_clause}
            ORDER BY c.issued_at DESC
            LIMIT 1
            """,
            {"subject_id": subject_id, **params}
        )
        return IssuedCredential(**dict(row)) if row else None

    async def list_by_subject(self, subject_id: str) -> List[IssuedCredential]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {CREDENTIAL_COLUMNS}
            FROM id_cards c
            LEFT JOIN id_card_templates t ON t.id = c.template_id
            WHERE c.issued_for_id::text = :subject_id
            ORDER BY c.issued_at DESC
            """,
            {"subject_id": subject_id}
        )
        return [IssuedCredential(**dict(row)) for row in rows]

    async def search(
        self,
        filters: IDCardListFilters,
        now: datetime,
    ) -> Tuple[List[IssuedCardSummary], int]:
        where_clauses = ["1=1"]
        params = {}

        if filters.type:
            where_clauses.append("c.type = :type")
            params["type"] = filters.type.value

        if filters.is_active is True:
            where_clauses.append("(c.expiry_date IS NULL OR c.expiry_date > :now)")
            params["now"] = now
        elif filters.is_active is False:
            where_clauses.append("c.expiry_date <= :now")
            params["now"] = now

        if filters.search:
            where_clauses.append(f"({HOLDER_NAME} ILIKE :search OR u.email ILIKE :search)")
            params["search"] = f"%{filters.search}%"

        where_sql = " AND ".join(where_clauses)
        from_sql = """
            FROM id_cards c
            LEFT JOIN id_card_templates t ON t.id = c.template_id
            LEFT JOIN users u ON u.id = c.issued_for_id AND u.deleted_at IS NULL
        """

        # Get total count
        count_result = await self._db.fetch_one(
            f"SELECT COUNT(*) as count {from_sql} WHERE {where_sql}",
            params
        )
        total = count_result["count"] if count_result else 0

        rows = await self._db.fetch_all(
            f"""
            SELECT {CREDENTIAL_COLUMNS}, {HOLDER_NAME} AS holder_name, u.email AS holder_email
            {from_sql}
            WHERE {where_sql}
            ORDER BY c.issued_at DESC
            LIMIT :limit OFFSET :skip
            """,
            {**params, "limit": filters.limit, "skip": filters.offset}
        )
        return [IssuedCardSummary(**dict(row)) for row in rows], total
