"""
apps.content_types.schema
~~~~~~~~~~~~~~~~~~~~~~~~~~
Plain value objects describing a content type and its fields.

This module is **pure Python** (no Django imports) so the admin view
builder can consume content types without touching the ORM.

Public API
----------
ContentTypeField   – one field definition
ContentType        – an ordered collection of field definitions
"""
from __future__ import annotations

from dataclasses import dataclass, field

#: Field-type tag of fields that must never be exposed to the admin UI.
PASSWORD_TYPE = "password"


@dataclass
class ContentTypeField:
    """
    A single field of a content type.

    Attributes:
        id: Field identifier, unique within its content type.
        type: UI field-type tag (``"text"``, ``"password"``, ...).
        return_type: Name of the GraphQL type the field resolves to.
        name: Human-readable display name.  Defaults to *id*.
        non_null / list_of / required: GraphQL and form flags.
        description: Optional help text.
    """

    id: str
    type: str
    return_type: str = "String"
    name: str | None = None
    non_null: bool = False
    list_of: bool = False
    required: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id

    @property
    def is_password(self) -> bool:
        return self.type == PASSWORD_TYPE

    @classmethod
    def from_definition(cls, definition: dict) -> ContentTypeField:
        """Build a field from its stored JSON shape (camelCase keys)."""
        return cls(
            id=definition["id"],
            type=definition["type"],
            return_type=definition.get("returnType") or "String",
            name=definition.get("name"),
            non_null=bool(definition.get("nonNull", False)),
            list_of=bool(definition.get("listOf", False)),
            required=bool(definition.get("required", False)),
            description=definition.get("description"),
        )


@dataclass
class ContentType:
    """
    A content type as known to the registry.

    Example::

        article = ContentType.from_definition(
            "Article",
            name="Articles",
            category="content",
            fields=[{"id": "title", "type": "text"}],
        )
    """

    id: str
    name: str
    category: str = "content"
    fields: list[ContentTypeField] = field(default_factory=list)

    @classmethod
    def from_definition(
        cls,
        id: str,
        *,
        name: str | None = None,
        category: str = "content",
        fields: list[dict] | None = None,
    ) -> ContentType:
        return cls(
            id=id,
            name=name or id,
            category=category,
            fields=[ContentTypeField.from_definition(f) for f in fields or []],
        )
