"""
apps.admin_views.services.admin_view
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Admin view model and its builder.

An admin view is a derived projection of a content type and, optionally, a
GraphQL fragment describing which fields the admin UI should fetch and how
to render them.

Construction (:meth:`AdminViewBuilder.build`):

1. Display settings come from the directive settings, falling back to the
   content type name (or ``"Untitled"``) and :data:`DEFAULT_TITLE_PATTERN`.
2. One descriptor is created per content-type field, in schema order.
   Password fields are skipped and never appear in any view.
3. Without a fragment definition a default view is synthesized that selects
   only ``id``; its field list still describes every content-type field.
4. With a fragment definition the fragment is resolved by
   :class:`~apps.admin_views.services.fragment_resolver.FragmentResolver`;
   content-type fields the fragment did not select are appended afterwards.

This module is **pure Python**: it has no Django imports.

Public API
----------
DEFAULT_TITLE_PATTERN
AdminViewSettings   – typed directive settings
AdminView           – the built view
AdminViewBuilder    – single entry point for construction
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from graphql.language import FragmentDefinitionNode

from apps.content_types.schema import ContentType

from .admin_view_field import AdminViewField
from .errors import InvalidSettingsError, MissingInputError
from .fragment_resolver import FragmentResolver

logger = structlog.get_logger(__name__)


#: Mustache template rendering a content item's title: ``title``, else
#: ``name``, else ``username``, else ``"<_name> <_category>"`` followed by
#: ``": <_meta.id>"`` when the item has an id.
DEFAULT_TITLE_PATTERN = (
    "{{^name}}{{^username}}{{ title }}{{/username}}{{/name}}"
    "{{^title}}{{^username}}{{ name }}{{/username}}{{/title}}"
    "{{^name}}{{^title}}{{username}}{{/title}}{{/name}}"
    "{{^name}}{{^title}}{{^username}}{{ _name }} {{ _category }}"
    "{{#_meta.id }}: {{ _meta.id }}{{/_meta.id}}{{/username}}{{/title}}{{/name}}"
)

#: Display name used when neither settings nor a content type provide one.
DEFAULT_NAME = "Untitled"


def normalize_groups(groups: Any, *, view_id: str | None = None) -> list:
    """
    Return *groups* as a list of group mappings.

    A single group mapping (one with a ``name`` key) is wrapped into a list;
    a mapping without one is read as a table of groups.

    Raises:
        InvalidSettingsError: If *groups* or one of its entries is not a
            mapping.
    """
    if not groups:
        return []
    if isinstance(groups, Mapping):
        groups = [dict(groups)] if "name" in groups else list(groups.values())
    elif isinstance(groups, (list, tuple)):
        groups = list(groups)
    else:
        raise InvalidSettingsError(
            f'"groups" must be an object or a list of objects, not {type(groups).__name__}.',
            view_id=view_id,
        )
    for group in groups:
        if not isinstance(group, Mapping):
            raise InvalidSettingsError(
                f'Every entry of "groups" must be an object, not {type(group).__name__}.',
                view_id=view_id,
            )
    return groups


@dataclass
class AdminViewSettings:
    """Display settings read from an admin view directive."""

    name: str | None = None
    title_pattern: str | None = None
    icon: str | None = None
    groups: list = field(default_factory=list)

    @classmethod
    def from_mapping(
        cls, settings: Any, *, view_id: str | None = None
    ) -> AdminViewSettings:
        """
        Build settings from the loose directive mapping.

        Empty values count as absent; ``groups`` is normalized with
        :func:`normalize_groups`.

        Raises:
            InvalidSettingsError: If *settings* is not a mapping or a
                display value is not a string.
        """
        if not settings:
            return cls()
        if not isinstance(settings, Mapping):
            raise InvalidSettingsError(
                f'"settings" must be an object, not {type(settings).__name__}.',
                view_id=view_id,
            )

        values: dict[str, str | None] = {}
        for key in ("name", "titlePattern", "icon"):
            value = settings.get(key) or None
            if value is not None and not isinstance(value, str):
                raise InvalidSettingsError(
                    f'"settings.{key}" must be a string, not {type(value).__name__}.',
                    view_id=view_id,
                )
            values[key] = value

        return cls(
            name=values["name"],
            title_pattern=values["titlePattern"],
            icon=values["icon"],
            groups=normalize_groups(settings.get("groups"), view_id=view_id),
        )


@dataclass
class AdminView:
    """
    A built admin view.

    ``fragment`` is directive-free GraphQL text (one or more fragment
    definitions) that the client includes in its queries.  ``fields`` lists
    the explicitly selected fields in selection order, followed by the
    remaining content-type fields in schema order.

    Decoration stages may reassign ``title_pattern``, ``icon``,
    ``permissions``, ``config`` and ``groups``; everything else is fixed at
    construction.
    """

    id: str
    return_type: str
    category: str
    type: str
    name: str
    fragment: str
    fields: list[AdminViewField] = field(default_factory=list)
    title_pattern: str = DEFAULT_TITLE_PATTERN
    icon: str | None = None
    permissions: list = field(default_factory=list)
    config: dict = field(default_factory=dict)
    groups: list = field(default_factory=list)

    def get_field(self, field_id: str) -> AdminViewField | None:
        return next((f for f in self.fields if f.id == field_id), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "returnType": self.return_type,
            "category": self.category,
            "type": self.type,
            "name": self.name,
            "titlePattern": self.title_pattern,
            "icon": self.icon,
            "permissions": self.permissions,
            "config": self.config,
            "groups": self.groups,
            "fragment": self.fragment,
            "fields": [f.to_dict() for f in self.fields],
        }


class AdminViewBuilder:
    """
    Builds :class:`AdminView` instances.

    Example::

        view = AdminViewBuilder.build(
            "TableAdminView",
            "content",
            content_type=article,
            definition=parse("fragment Articles on Article { title }").definitions[0],
        )
        view.fragment   # 'fragment Articles on Article {\\n  title\\n}'
    """

    @staticmethod
    def build(
        return_type: str,
        category: str,
        content_type: ContentType | None = None,
        definition: FragmentDefinitionNode | None = None,
        settings: AdminViewSettings | Mapping | None = None,
        config: Mapping | None = None,
        native_fragments: Mapping[str, FragmentDefinitionNode] | None = None,
    ) -> AdminView:
        """
        Build an admin view.

        Args:
            return_type: GraphQL type the view is served as.
            category: Admin category (``"content"``, ``"user"``, ...).
            content_type: Content type supplying field metadata.  Optional
                when *definition* is given.
            definition: Fragment definition selecting the view's fields.
                ``None`` builds the content type's default view.
            settings: Display settings, typed or as the raw directive
                mapping.
            config: Free-form view configuration.  Copied.
            native_fragments: Fragment definitions available to spreads,
                keyed by name.  Never mutated.

        Raises:
            MissingInputError: If neither *content_type* nor *definition*
                is given.
            InvalidSettingsError: If *settings* is malformed.
            UnknownFragmentError / FragmentCycleError /
            UnsupportedSelectionError: Propagated from fragment resolution.
        """
        if content_type is None and definition is None:
            raise MissingInputError(
                "An admin view needs a content type, a fragment definition, or both."
            )

        if not isinstance(settings, AdminViewSettings):
            settings = AdminViewSettings.from_mapping(
                settings,
                view_id=definition.name.value if definition is not None else None,
            )

        name = settings.name or (content_type.name if content_type else DEFAULT_NAME)

        # ── Content-type descriptors, schema order, passwords skipped ─────
        ct_fields: dict[str, AdminViewField] = {}
        excluded: set[str] = set()
        if content_type is not None:
            for ct_field in content_type.fields:
                if ct_field.is_password:
                    excluded.add(ct_field.id)
                    continue
                ct_fields[ct_field.id] = AdminViewField.from_content_type_field(ct_field)

        if definition is None:
            view_id = f"{content_type.id}defaultAdminView"
            view_type = content_type.id
            fields = [AdminViewField.computed_field("id", "id", "id", "#")]
            fields.extend(ct_fields.values())
            fragment = f"fragment {view_id} on {view_type} {{ id }}"
        else:
            view_id = definition.name.value
            view_type = definition.type_condition.name.value
            resolver = FragmentResolver(
                ct_fields,
                native_fragments,
                excluded_fields=frozenset(excluded),
                view_id=view_id,
            )
            fragment = resolver.resolve(definition)
            fields = resolver.fields + list(ct_fields.values())

        logger.debug(
            "admin_view_built",
            view_id=view_id,
            type=view_type,
            field_count=len(fields),
            default=definition is None,
        )

        return AdminView(
            id=view_id,
            return_type=return_type,
            category=category,
            type=view_type,
            name=name,
            fragment=fragment,
            fields=fields,
            title_pattern=settings.title_pattern or DEFAULT_TITLE_PATTERN,
            icon=settings.icon,
            config=dict(config or {}),
            groups=settings.groups,
        )
