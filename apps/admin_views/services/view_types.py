"""
apps.admin_views.services.view_types
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Admin view types.

A view type is selected by a directive on a fragment definition, e.g.::

    fragment Articles on Article @table(settings: {name: "All articles"}, limit: 20) {
        title
    }

The directive's ``settings`` argument becomes the view's display settings;
every other argument ends up in the view's ``config``.
"""
from __future__ import annotations

from collections.abc import Mapping

from graphql.language import FragmentDefinitionNode

from apps.content_types.schema import ContentType

from .admin_view import AdminView, AdminViewBuilder, AdminViewSettings


class AdminViewType:
    """Base class; subclasses set the three class attributes."""

    #: Fragment directive selecting this type.
    directive: str = ""
    #: GraphQL type the built views are served as.
    return_type: str = ""
    #: Category used when the fragment targets no known content type.
    default_category: str = "content"

    def build(
        self,
        *,
        content_type: ContentType | None = None,
        definition: FragmentDefinitionNode | None = None,
        directive_args: Mapping | None = None,
        native_fragments: Mapping[str, FragmentDefinitionNode] | None = None,
    ) -> AdminView:
        directive_args = dict(directive_args or {})
        settings = AdminViewSettings.from_mapping(
            directive_args.pop("settings", None),
            view_id=definition.name.value if definition is not None else None,
        )
        category = content_type.category if content_type else self.default_category
        return AdminViewBuilder.build(
            self.return_type,
            category,
            content_type=content_type,
            definition=definition,
            settings=settings,
            config=directive_args,
            native_fragments=native_fragments,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} @{self.directive}>"


class TableAdminViewType(AdminViewType):
    directive = "table"
    return_type = "TableAdminView"


class SingleAdminViewType(AdminViewType):
    """Views over single-instance content, such as settings."""

    directive = "single"
    return_type = "SingleAdminView"
    default_category = "setting"
