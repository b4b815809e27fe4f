from __future__ import annotations
"""
server/creomotion/api/schemas/base.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Modèle de base des payloads : JSON en camelCase, attributs Python en snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )

    def changes(self) -> dict:
        """Champs effectivement envoyés (mise à jour partielle), en snake_case."""
        return self.model_dump(exclude_unset=True)
