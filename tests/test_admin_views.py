"""
tests.test_admin_views
~~~~~~~~~~~~~~~~~~~~~~~
Unit tests for the admin view core.  No database access required.

Covers:
- AdminViewField          (descriptor model, directive capture)
- AdminViewSettings       (directive settings, groups normalization)
- AdminViewBuilder        (default views, fragment views, field ordering)
- FragmentResolver        (spreads, directive stripping, error kinds)
- AdminViewTypeManager    (registration, document-level builds)
- ContentTypeValidator    (field definition contract)
"""
from __future__ import annotations

import pytest
from graphql import parse, print_ast

from apps.admin_views.services import (
    DEFAULT_TITLE_PATTERN,
    AdminViewBuilder,
    AdminViewField,
    AdminViewSettings,
    AdminViewTypeManager,
    DuplicateAdminViewError,
    FragmentCycleError,
    InvalidSettingsError,
    MissingInputError,
    UnknownFragmentError,
    UnresolvedVariableError,
    UnsupportedSelectionError,
)
from apps.admin_views.services.admin_view import normalize_groups
from apps.admin_views.services.admin_view_field import get_directives
from apps.admin_views.services.view_types import SingleAdminViewType, TableAdminViewType
from apps.content_types.schema import ContentType, ContentTypeField
from apps.content_types.validators import ContentTypeValidationError, ContentTypeValidator


# ===========================================================================
# Shared realistic content type
# ===========================================================================

ARTICLE_FIELDS: list[dict] = [
    {
        "id": "title",
        "type": "text",
        "name": "Title",
        "nonNull": True,
        "required": True,
        "description": "Shown as the page heading.",
    },
    {"id": "body", "type": "textarea", "name": "Body"},
    {"id": "tags", "type": "text", "name": "Tags", "listOf": True},
    # never exposed to admin views
    {"id": "secret", "type": "password"},
]

ARTICLE = ContentType.from_definition(
    "Article", name="Articles", category="content", fields=ARTICLE_FIELDS
)


def fragments(source: str) -> dict:
    """Parse *source* and return its fragment definitions keyed by name."""
    return {d.name.value: d for d in parse(source).definitions}


def squash(text: str) -> str:
    """Collapse whitespace so printed GraphQL compares on one line."""
    return " ".join(text.split())


def build(source: str, name: str, content_type: ContentType | None = ARTICLE, **kwargs):
    table = fragments(source)
    return AdminViewBuilder.build(
        "TableAdminView",
        "content",
        content_type=content_type,
        definition=table[name],
        native_fragments=table,
        **kwargs,
    )


# ===========================================================================
# TestAdminViewField
# ===========================================================================

class TestAdminViewField:

    def test_from_content_type_field_is_form_only(self):
        field = AdminViewField.from_content_type_field(ARTICLE.fields[0])
        assert field.id == "title"
        assert field.type == "String"
        assert field.field_type == "text"
        assert field.name == "Title"
        assert field.show_in_form is True
        assert field.show_in_list is False
        assert field.non_null is True
        assert field.required is True
        assert field.description == "Shown as the page heading."

    def test_computed_field_is_list_only(self):
        field = AdminViewField.computed_field("id", "id", "id", "#")
        assert field.show_in_list is True
        assert field.show_in_form is False
        assert field.required is False
        assert field.directives == []

    def test_directives_are_captured_with_plain_values(self):
        selection = parse(
            'fragment F on Article { title @list(width: 200, label: "T", sortable: true) @hidden }'
        ).definitions[0].selection_set.selections[0]
        assert get_directives(selection) == [
            {"name": "list", "args": {"width": 200, "label": "T", "sortable": True}},
            {"name": "hidden", "args": {}},
        ]

    def test_directive_variables_are_rejected(self):
        selection = parse(
            "fragment F on Article { title @list(width: $width) }"
        ).definitions[0].selection_set.selections[0]
        with pytest.raises(UnresolvedVariableError) as exc_info:
            get_directives(selection, view_id="F")
        assert exc_info.value.directive == "list"
        assert exc_info.value.argument == "width"
        assert exc_info.value.view_id == "F"

    def test_nested_directive_variables_are_rejected(self):
        definition = parse(
            "fragment F on Article @table(settings: {groups: [{name: $group}]}) { title }"
        ).definitions[0]
        with pytest.raises(UnresolvedVariableError):
            get_directives(definition)

    def test_to_dict_uses_client_keys(self):
        data = AdminViewField.computed_field("id", "id", "id", "#").to_dict()
        assert data["fieldType"] == "id"
        assert data["showInList"] is True
        assert data["showInForm"] is False


# ===========================================================================
# TestAdminViewSettings
# ===========================================================================

class TestAdminViewSettings:

    def test_single_group_mapping_is_wrapped(self):
        assert normalize_groups({"name": "Main", "icon": "home"}) == [
            {"name": "Main", "icon": "home"}
        ]

    def test_group_list_is_kept(self):
        groups = [{"name": "Main"}, {"name": "Meta"}]
        assert normalize_groups(groups) == groups

    def test_missing_groups_become_empty_list(self):
        assert normalize_groups(None) == []

    def test_empty_values_count_as_absent(self):
        settings = AdminViewSettings.from_mapping({"name": "", "titlePattern": "", "icon": ""})
        assert settings.name is None
        assert settings.title_pattern is None
        assert settings.icon is None

    def test_from_mapping_reads_camel_case_keys(self):
        settings = AdminViewSettings.from_mapping({
            "name": "All articles",
            "titlePattern": "{{ title }}",
            "icon": "file",
            "groups": {"name": "Content"},
        })
        assert settings.name == "All articles"
        assert settings.title_pattern == "{{ title }}"
        assert settings.icon == "file"
        assert settings.groups == [{"name": "Content"}]

    def test_settings_must_be_a_mapping(self):
        with pytest.raises(InvalidSettingsError) as exc_info:
            AdminViewSettings.from_mapping("x", view_id="Articles")
        assert exc_info.value.view_id == "Articles"

    def test_display_values_must_be_strings(self):
        with pytest.raises(InvalidSettingsError):
            AdminViewSettings.from_mapping({"name": ["All", "articles"]})

    def test_string_groups_are_rejected(self):
        with pytest.raises(InvalidSettingsError):
            normalize_groups("Main")

    def test_group_entries_must_be_mappings(self):
        with pytest.raises(InvalidSettingsError):
            normalize_groups([{"name": "Main"}, "Meta"])


# ===========================================================================
# TestDefaultAdminView
# ===========================================================================

class TestDefaultAdminView:

    def _build(self, **kwargs):
        return AdminViewBuilder.build("TableAdminView", "content", content_type=ARTICLE, **kwargs)

    def test_default_view_identity_and_fragment(self):
        view = self._build()
        assert view.id == "ArticledefaultAdminView"
        assert view.type == "Article"
        assert view.fragment == "fragment ArticledefaultAdminView on Article { id }"

    def test_default_view_has_id_field_plus_non_password_fields(self):
        view = self._build()
        # 3 non-password schema fields + synthetic id
        assert [f.id for f in view.fields] == ["id", "title", "body", "tags"]
        assert view.fields[0].name == "#"
        assert view.fields[0].field_type == "id"

    def test_display_defaults(self):
        view = self._build()
        assert view.name == "Articles"
        assert view.title_pattern == DEFAULT_TITLE_PATTERN
        assert view.icon is None
        assert view.groups == []
        assert view.permissions == []
        assert view.config == {}

    def test_settings_override_display_defaults(self):
        view = self._build(
            settings={"name": "News", "titlePattern": "{{ title }}", "icon": "news"},
            config={"limit": 10},
        )
        assert view.name == "News"
        assert view.title_pattern == "{{ title }}"
        assert view.icon == "news"
        assert view.config == {"limit": 10}

    def test_config_is_copied(self):
        config = {"limit": 10}
        view = self._build(config=config)
        view.config["limit"] = 50
        assert config == {"limit": 10}

    def test_default_title_pattern_fallback_chain(self):
        assert DEFAULT_TITLE_PATTERN == (
            "{{^name}}{{^username}}{{ title }}{{/username}}{{/name}}"
            "{{^title}}{{^username}}{{ name }}{{/username}}{{/title}}"
            "{{^name}}{{^title}}{{username}}{{/title}}{{/name}}"
            "{{^name}}{{^title}}{{^username}}{{ _name }} {{ _category }}"
            "{{#_meta.id }}: {{ _meta.id }}{{/_meta.id}}{{/username}}{{/title}}{{/name}}"
        )

    def test_neither_content_type_nor_fragment_is_rejected(self):
        with pytest.raises(MissingInputError):
            AdminViewBuilder.build("TableAdminView", "content")


# ===========================================================================
# TestFragmentAdminView
# ===========================================================================

class TestFragmentAdminView:

    def test_end_to_end_page(self):
        page = ContentType.from_definition("Page", fields=[
            {"id": "title", "type": "text"},
            {"id": "secret", "type": "password"},
        ])
        view = build("fragment F on Page { title }", "F", content_type=page)
        assert view.id == "F"
        assert view.type == "Page"
        assert [f.id for f in view.fields] == ["title"]
        assert view.fields[0].show_in_form is True
        assert squash(view.fragment) == "fragment F on Page { title }"

    def test_selected_fields_first_then_schema_order(self):
        view = build("fragment F on Article { body title }", "F")
        assert [f.id for f in view.fields] == ["body", "title", "tags"]

    def test_selected_field_inherits_schema_metadata(self):
        view = build("fragment F on Article { title }", "F")
        title = view.get_field("title")
        assert title.name == "Title"
        assert title.field_type == "text"
        assert title.type == "title"
        assert title.show_in_list is True
        assert title.show_in_form is True
        assert title.required is True
        assert title.non_null is True
        assert title.description == "Shown as the page heading."

    def test_unselected_schema_fields_stay_hidden_in_list(self):
        view = build("fragment F on Article { title }", "F")
        assert view.get_field("body").show_in_list is False

    def test_alias_sets_id_and_keeps_schema_semantics(self):
        view = build("fragment F on Article { headline: body }", "F")
        headline = view.get_field("headline")
        assert headline.name == "Body"
        assert headline.field_type == "textarea"
        assert headline.type == "body"
        # "body" itself was not consumed by the aliased selection
        assert [f.id for f in view.fields] == ["headline", "title", "body", "tags"]

    def test_unknown_fields_are_plain_text(self):
        view = build("fragment F on Article { id created }", "F")
        assert view.get_field("id").field_type == "id"
        created = view.get_field("created")
        assert created.field_type == "text"
        assert created.name == "created"
        assert created.show_in_form is False

    def test_password_fields_are_never_listed(self):
        view = build("fragment F on Article { title secret pw: secret }", "F")
        ids = [f.id for f in view.fields]
        assert "secret" not in ids
        assert "pw" not in ids

    def test_alias_named_like_a_password_field_is_excluded(self):
        view = build("fragment F on Article { secret: title body }", "F")
        ids = [f.id for f in view.fields]
        assert "secret" not in ids
        # the unselected title still comes from the schema
        assert ids == ["body", "title", "tags"]

    def test_fragment_without_content_type(self):
        view = build("fragment F on Dashboard { id stats }", "F", content_type=None)
        assert view.name == "Untitled"
        assert [f.id for f in view.fields] == ["id", "stats"]

    def test_duplicate_selection_is_not_deduplicated(self):
        view = build("fragment F on Article { title title }", "F")
        titles = [f for f in view.fields if f.id == "title"]
        assert len(titles) == 2
        assert titles[0].name == "Title"
        # the schema entry was consumed by the first selection
        assert titles[1].name == "title"
        assert titles[1].field_type == "text"

    def test_field_directives_recorded_and_stripped(self):
        view = build(
            'fragment F on Article @table(limit: 5) { title @list(width: 3) body }',
            "F",
        )
        assert view.get_field("title").directives == [{"name": "list", "args": {"width": 3}}]
        assert view.get_field("body").directives == []
        assert "@" not in view.fragment

    def test_nested_directives_are_stripped(self):
        view = build(
            "fragment F on Article { author @include(if: true) { name @skip(if: false) } }",
            "F",
        )
        assert "@" not in view.fragment
        assert squash(view.fragment) == "fragment F on Article { author { name } }"

    def test_build_is_deterministic(self):
        source = "fragment F on Article @table { title @list(width: 1) ...M } fragment M on Article { tags }"
        first = build(source, "F")
        second = build(source, "F")
        assert [f.to_dict() for f in first.fields] == [f.to_dict() for f in second.fields]
        assert first.fragment == second.fragment


# ===========================================================================
# TestFragmentSpreads
# ===========================================================================

NESTED_SOURCE = """
fragment Outer on Article @table { title ...Middle @include(if: true) }
fragment Middle on Article @meta(x: 1) { body ...Inner }
fragment Inner on Article { tags @list(width: 2) id }
"""


class TestFragmentSpreads:

    def test_nested_spreads_emit_innermost_first(self):
        view = build(NESTED_SOURCE, "Outer")
        names = [d.name.value for d in parse(view.fragment).definitions]
        assert names == ["Inner", "Middle", "Outer"]

    def test_spread_fields_join_the_field_list(self):
        view = build(NESTED_SOURCE, "Outer")
        assert [f.id for f in view.fields] == ["title", "body", "tags", "id"]
        # consumed through the spread, so not appended again
        assert view.get_field("tags").show_in_form is True
        assert view.get_field("tags").list_of is True

    def test_no_directive_survives_anywhere(self):
        view = build(NESTED_SOURCE, "Outer")
        assert "@" not in view.fragment
        assert view.get_field("tags").directives == [{"name": "list", "args": {"width": 2}}]

    def test_shared_definitions_are_not_mutated(self):
        table = fragments(NESTED_SOURCE)
        before = {name: print_ast(d) for name, d in table.items()}
        AdminViewBuilder.build(
            "TableAdminView",
            "content",
            content_type=ARTICLE,
            definition=table["Outer"],
            native_fragments=table,
        )
        assert {name: print_ast(d) for name, d in table.items()} == before
        assert "@include" in before["Outer"]

    def test_unknown_spread_fails_fast(self):
        with pytest.raises(UnknownFragmentError) as exc_info:
            build("fragment F on Article { title ...Missing }", "F")
        assert exc_info.value.fragment_name == "Missing"
        assert exc_info.value.view_id == "F"

    def test_cycle_is_detected(self):
        source = "fragment A on Article { title ...B } fragment B on Article { body ...A }"
        with pytest.raises(FragmentCycleError) as exc_info:
            build(source, "A")
        assert exc_info.value.path == ["A", "B", "A"]

    def test_self_spread_is_detected(self):
        with pytest.raises(FragmentCycleError) as exc_info:
            build("fragment A on Article { title ...A }", "A")
        assert exc_info.value.path == ["A", "A"]

    def test_same_fragment_spread_twice_is_not_a_cycle(self):
        source = (
            "fragment A on Article { ...B ...C } "
            "fragment B on Article { title ...D } "
            "fragment C on Article { body ...D } "
            "fragment D on Article { id }"
        )
        view = build(source, "A")
        assert [f.id for f in view.fields][:4] == ["title", "id", "body", "id"]

    def test_fragment_reached_twice_is_printed_once(self):
        source = (
            "fragment A on Article { ...B ...C } "
            "fragment B on Article { title ...D } "
            "fragment C on Article { body ...D } "
            "fragment D on Article { id }"
        )
        view = build(source, "A")
        names = [d.name.value for d in parse(view.fragment).definitions]
        assert names == ["D", "B", "C", "A"]

    def test_spreads_in_sub_selections_are_printed(self):
        source = (
            "fragment F on Article { title author { ...AuthorFields } } "
            "fragment AuthorFields on User @meta { name ...Avatar } "
            "fragment Avatar on User { avatar { url } }"
        )
        view = build(source, "F")
        names = [d.name.value for d in parse(view.fragment).definitions]
        assert names == ["Avatar", "AuthorFields", "F"]
        assert "@" not in view.fragment
        # fields of nested objects are not admin view fields
        assert [f.id for f in view.fields][:2] == ["title", "author"]
        assert view.get_field("name") is None

    def test_unknown_spread_in_sub_selection_fails_fast(self):
        with pytest.raises(UnknownFragmentError) as exc_info:
            build("fragment F on Article { author { ...Missing } }", "F")
        assert exc_info.value.fragment_name == "Missing"

    def test_cycle_through_sub_selection_is_detected(self):
        source = (
            "fragment A on Article { title ...B } "
            "fragment B on Article { related { ...A } }"
        )
        with pytest.raises(FragmentCycleError) as exc_info:
            build(source, "A")
        assert exc_info.value.path == ["A", "B", "A"]

    def test_inline_fragments_are_rejected(self):
        with pytest.raises(UnsupportedSelectionError) as exc_info:
            build("fragment F on Article { ... on Article { title } }", "F")
        assert exc_info.value.kind == "inline_fragment"


# ===========================================================================
# TestAdminViewTypeManager
# ===========================================================================

SETTINGS_TYPE = ContentType.from_definition(
    "SiteSettings", name="Site settings", category="setting",
    fields=[{"id": "siteName", "type": "text"}],
)

DOCUMENT = """
fragment Articles on Article @table(settings: {name: "All articles", groups: {name: "Main"}}, limit: 20) {
    title
    ...ArticleMeta
}
fragment ArticleMeta on Article { tags }
fragment Overview on Dashboard @single { id }
"""


class TestAdminViewTypeManager:

    def _manager(self):
        return AdminViewTypeManager([TableAdminViewType(), SingleAdminViewType()])

    def test_duplicate_directive_rejected(self):
        manager = self._manager()
        with pytest.raises(ValueError):
            manager.register(TableAdminViewType())

    def test_default_type_is_first_registered(self):
        assert isinstance(self._manager().default_type, TableAdminViewType)

    def test_document_views_then_defaults(self):
        views = self._manager().build_admin_views(DOCUMENT, [ARTICLE, SETTINGS_TYPE])
        assert [v.id for v in views] == ["Articles", "Overview", "SiteSettingsdefaultAdminView"]

    def test_directive_settings_and_config(self):
        articles = self._manager().build_admin_views(DOCUMENT, [ARTICLE])[0]
        assert articles.return_type == "TableAdminView"
        assert articles.category == "content"
        assert articles.name == "All articles"
        assert articles.groups == [{"name": "Main"}]
        assert articles.config == {"limit": 20}
        assert [f.id for f in articles.fields] == ["title", "tags", "body"]

    def test_view_without_content_type_uses_type_category(self):
        overview = self._manager().build_admin_views(DOCUMENT, [])[1]
        assert overview.return_type == "SingleAdminView"
        assert overview.category == "setting"
        assert overview.name == "Untitled"

    def test_default_view_uses_content_type_category(self):
        views = self._manager().build_admin_views(None, [SETTINGS_TYPE])
        assert len(views) == 1
        assert views[0].category == "setting"
        assert views[0].return_type == "TableAdminView"

    def test_duplicate_view_ids_rejected(self):
        source = "fragment Same on Article @table { title } fragment Same on Page @table { id }"
        with pytest.raises(DuplicateAdminViewError):
            self._manager().build_admin_views(source, [])

    def test_view_directive_variable_rejected(self):
        source = "fragment A on Article @table(limit: $x) { title }"
        with pytest.raises(UnresolvedVariableError) as exc_info:
            self._manager().build_admin_views(source, [ARTICLE])
        assert exc_info.value.view_id == "A"

    def test_malformed_settings_rejected(self):
        source = 'fragment A on Article @table(settings: "x") { title }'
        with pytest.raises(InvalidSettingsError) as exc_info:
            self._manager().build_admin_views(source, [ARTICLE])
        assert exc_info.value.view_id == "A"


# ===========================================================================
# TestContentTypeValidator
# ===========================================================================

class TestContentTypeValidator:

    def test_valid_fields_pass(self):
        ContentTypeValidator.validate(ARTICLE_FIELDS)  # must not raise

    def test_not_a_list_raises(self):
        with pytest.raises(ContentTypeValidationError) as exc_info:
            ContentTypeValidator.validate({"id": "title"})
        assert exc_info.value.errors[0]["field"] == "fields"

    def test_invalid_graphql_name_raises(self):
        with pytest.raises(ContentTypeValidationError) as exc_info:
            ContentTypeValidator.validate([{"id": "bad-id", "type": "text"}])
        assert exc_info.value.errors[0]["field"] == "fields.0.id"

    def test_duplicate_ids_raise(self):
        with pytest.raises(ContentTypeValidationError) as exc_info:
            ContentTypeValidator.validate([
                {"id": "title", "type": "text"},
                {"id": "title", "type": "text"},
            ])
        assert any("Duplicate" in e["message"] for e in exc_info.value.errors)

    def test_all_errors_collected(self):
        with pytest.raises(ContentTypeValidationError) as exc_info:
            ContentTypeValidator.validate([
                {},                                              # id + type missing
                {"id": "flag", "type": "checkbox", "required": "yes"},  # not a bool
                {"id": "x", "type": "text", "colour": "red"},    # unknown key
            ])
        assert len(exc_info.value.errors) >= 4

    def test_schema_field_defaults(self):
        field = ContentTypeField.from_definition({"id": "title", "type": "text"})
        assert field.name == "title"
        assert field.return_type == "String"
        assert field.is_password is False
