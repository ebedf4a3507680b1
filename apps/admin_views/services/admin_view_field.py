"""
apps.admin_views.services.admin_view_field
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Field descriptors rendered by the generic admin UI.

A descriptor is created either from a content-type field (shown in forms,
hidden in lists) or computed from a fragment selection (shown in lists,
hidden in forms).  When a selection targets a content-type field, the
selection's descriptor takes over the schema flags via :meth:`merge_from`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from graphql.language import (
    DirectiveNode,
    ListValueNode,
    ObjectValueNode,
    ValueNode,
    VariableNode,
)
from graphql.utilities import value_from_ast_untyped

from apps.content_types.schema import ContentTypeField

from .errors import UnresolvedVariableError


def _uses_variable(value: ValueNode) -> bool:
    if isinstance(value, VariableNode):
        return True
    if isinstance(value, ListValueNode):
        return any(_uses_variable(item) for item in value.values)
    if isinstance(value, ObjectValueNode):
        return any(_uses_variable(item.value) for item in value.fields)
    return False


def get_directives(node, *, view_id: str | None = None) -> list[dict[str, Any]]:
    """
    Return the directives attached to *node* as plain dicts.

    Each entry is ``{"name": <directive name>, "args": {<arg>: <value>}}``
    with argument literals converted to Python values.

    Raises:
        UnresolvedVariableError: If an argument refers to a variable, at
            any nesting depth.
    """
    directives: list[dict[str, Any]] = []
    for directive in node.directives or ():
        if not isinstance(directive, DirectiveNode):
            continue
        args: dict[str, Any] = {}
        for arg in directive.arguments or ():
            if _uses_variable(arg.value):
                raise UnresolvedVariableError(
                    directive.name.value, arg.name.value, view_id=view_id
                )
            args[arg.name.value] = value_from_ast_untyped(arg.value)
        directives.append({"name": directive.name.value, "args": args})
    return directives


@dataclass
class AdminViewField:
    """
    One field of an :class:`~apps.admin_views.services.admin_view.AdminView`.

    Attributes:
        id: Field id, the alias when the selection was aliased.
        type: GraphQL type name, or the selected field's own name for
            computed fields.
        field_type: UI field-type tag used by the renderer.
        name: Display name.
        show_in_list / show_in_form: Visibility in list and form pages.
        list_of / non_null / required: GraphQL and form flags.
        description: Optional help text.
        directives: Directives found on the selection, for later
            decoration stages.
    """

    id: str
    type: str
    field_type: str
    name: str
    show_in_list: bool = True
    show_in_form: bool = False
    list_of: bool = False
    non_null: bool = False
    required: bool = False
    description: str | None = None
    directives: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_content_type_field(cls, ct_field: ContentTypeField) -> AdminViewField:
        return cls(
            id=ct_field.id,
            type=ct_field.return_type,
            field_type=ct_field.type,
            name=ct_field.name or ct_field.id,
            show_in_list=False,
            show_in_form=True,
            list_of=ct_field.list_of,
            non_null=ct_field.non_null,
            required=ct_field.required,
            description=ct_field.description,
        )

    @classmethod
    def computed_field(cls, id: str, type: str, field_type: str, name: str) -> AdminViewField:
        return cls(id=id, type=type, field_type=field_type, name=name)

    def merge_from(self, other: AdminViewField) -> AdminViewField:
        """Take over form visibility, flags and description from *other*."""
        self.show_in_form = other.show_in_form
        self.list_of = other.list_of
        self.non_null = other.non_null
        self.required = other.required
        self.description = other.description
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "fieldType": self.field_type,
            "name": self.name,
            "showInList": self.show_in_list,
            "showInForm": self.show_in_form,
            "listOf": self.list_of,
            "nonNull": self.non_null,
            "required": self.required,
            "description": self.description,
            "directives": self.directives,
        }
