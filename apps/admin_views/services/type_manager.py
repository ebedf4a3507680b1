"""
apps.admin_views.services.type_manager
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Registry of admin view types and the document-level build entry point.

``AdminViewTypeManager.build_admin_views`` turns a GraphQL document of
fragment definitions plus the registered content types into the complete
list of admin views:

1. Every fragment definition in the document is available to spreads.
2. Each fragment carrying a registered view-type directive becomes one view.
   Fragments without one are only building blocks for other fragments.
3. Each content type that no fragment targets receives a default view from
   the default (first registered) view type.

This module is **pure Python**: it has no Django imports.
"""
from __future__ import annotations

from collections.abc import Iterable

import structlog
from graphql import parse
from graphql.language import DocumentNode, FragmentDefinitionNode

from apps.content_types.schema import ContentType

from .admin_view import AdminView
from .admin_view_field import get_directives
from .errors import DuplicateAdminViewError
from .view_types import AdminViewType

logger = structlog.get_logger(__name__)


class AdminViewTypeManager:
    """
    Holds the registered :class:`AdminViewType` instances, keyed by directive.

    Example::

        manager = AdminViewTypeManager()
        manager.register(TableAdminViewType())
        views = manager.build_admin_views(
            'fragment Articles on Article @table { title }',
            [article],
        )
    """

    def __init__(self, view_types: Iterable[AdminViewType] = ()) -> None:
        self._types: dict[str, AdminViewType] = {}
        for view_type in view_types:
            self.register(view_type)

    def register(self, view_type: AdminViewType) -> AdminViewType:
        if not view_type.directive:
            raise ValueError(f"{view_type!r} declares no directive.")
        if view_type.directive in self._types:
            raise ValueError(
                f'An admin view type for "@{view_type.directive}" is already registered.'
            )
        self._types[view_type.directive] = view_type
        logger.debug(
            "admin_view_type_registered",
            directive=view_type.directive,
            return_type=view_type.return_type,
        )
        return view_type

    def get(self, directive: str) -> AdminViewType | None:
        return self._types.get(directive)

    @property
    def types(self) -> list[AdminViewType]:
        return list(self._types.values())

    @property
    def default_type(self) -> AdminViewType | None:
        return next(iter(self._types.values()), None)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build_admin_views(
        self,
        document: str | DocumentNode | None,
        content_types: Iterable[ContentType] = (),
    ) -> list[AdminView]:
        """
        Build every admin view described by *document* and *content_types*.

        Args:
            document: GraphQL source or parsed document holding fragment
                definitions.  ``None`` or ``""`` yields default views only.
            content_types: Content types known to the registry, in display
                order.

        Returns:
            Views declared in the document (document order), followed by
            default views (content-type order).

        Raises:
            graphql.GraphQLError: If *document* is not valid GraphQL syntax.
            DuplicateAdminViewError: If two views share an id.
            AdminViewBuildError: Any error raised while building a view.
        """
        if isinstance(document, str):
            document = parse(document) if document.strip() else None

        definitions: list[FragmentDefinitionNode] = [
            definition
            for definition in (document.definitions if document else ())
            if isinstance(definition, FragmentDefinitionNode)
        ]
        native_fragments = {d.name.value: d for d in definitions}
        known_types = {ct.id: ct for ct in content_types}

        views: list[AdminView] = []
        covered: set[str] = set()

        for definition in definitions:
            view_id = definition.name.value
            for directive in get_directives(definition, view_id=view_id):
                view_type = self.get(directive["name"])
                if view_type is None:
                    continue
                type_condition = definition.type_condition.name.value
                views.append(view_type.build(
                    content_type=known_types.get(type_condition),
                    definition=definition,
                    directive_args=directive["args"],
                    native_fragments=native_fragments,
                ))
                covered.add(type_condition)
                break

        default_type = self.default_type
        if default_type is not None:
            for type_id, content_type in known_types.items():
                if type_id not in covered:
                    views.append(default_type.build(content_type=content_type))

        seen: set[str] = set()
        for view in views:
            if view.id in seen:
                raise DuplicateAdminViewError(
                    f'Admin view id "{view.id}" is used more than once.',
                    view_id=view.id,
                )
            seen.add(view.id)

        logger.info(
            "admin_views_built",
            view_count=len(views),
            fragment_count=len(definitions),
            content_type_count=len(known_types),
        )
        return views
