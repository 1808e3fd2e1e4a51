"""
Template Repository
ID card templates and their fields
"""

from typing import Optional
from databases import Database

from cardhub.database import database as default_database
from cardhub.schemas.template import IDCardTemplate, TemplateField


class TemplateRepository:
    """SQL access to ID card templates"""

    def __init__(self, db: Database = default_database):
        self._db = db

    async def get_by_id(self, template_id: str, with_fields: bool = True) -> Optional[IDCardTemplate]:
        template = await self._db.fetch_one(
            """
            SELECT id::text AS id, name, type, status, dimensions, orientation, usage_count
            FROM id_card_templates
            WHERE id::text = :template_id
            """,
            {"template_id": template_id}
        )
        if not template:
            return None

        fields = []
        if with_fields:
            rows = await self._db.fetch_all(
                """
                SELECT id::text AS id, field_type, data_source, database_field, static_text,
                       image_url, placeholder, label, x, y, width, height, font_size,
                       font_family, font_weight, text_align, color, background_color
                FROM id_card_template_fields
                WHERE template_id::text = :template_id
                ORDER BY sort_order, id
                """,
                {"template_id": template_id}
            )
            fields = [TemplateField(**dict(row)) for row in rows]

        return IDCardTemplate(**dict(template), fields=fields)

    async def increment_usage(self, template_id: str) -> None:
        await self._db.execute(
            """
            UPDATE id_card_templates
            SET usage_count = COALESCE(usage_count, 0) + 1, updated_at = NOW()
            WHERE id::text = :template_id
            """,
            {"template_id": template_id}
        )
