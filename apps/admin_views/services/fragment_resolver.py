"""
apps.admin_views.services.fragment_resolver
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Recursive resolution of an admin view fragment into field descriptors and
client-ready fragment text.

Resolution walks the fragment's top-level selections in document order:

1. **Fragment spreads** are looked up in the native-fragment table,
   deep-copied and resolved recursively with the same resolver, so fields
   contributed anywhere in the fragment tree share one content-type field
   table.
2. **Fields** become :class:`AdminViewField` descriptors.  The alias (or the
   field name) is the descriptor id; a content-type field with the selected
   field's own name supplies display name and UI field type; a content-type
   field with the descriptor id supplies the form flags and is *consumed*,
   i.e. removed from the table.  Spreads inside a field's sub-selection
   contribute no descriptors, but their fragments are still looked up and
   printed.
3. Any other selection kind is rejected with
   :class:`~apps.admin_views.services.errors.UnsupportedSelectionError`.

Every fragment reached from the definition is printed exactly once, before
any fragment that spreads it, so the text is a valid set of definitions for
a client query document.  Directives are collected onto descriptors and then
removed from the whole printed tree; they never reach the client.  Input
definitions are never mutated: the shared native-fragment table is reused
across builds.

This module is **pure Python**: it has no Django imports.
"""
from __future__ import annotations

import copy
from collections.abc import Mapping

import structlog
from graphql import print_ast
from graphql.language import (
    REMOVE,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    SelectionSetNode,
    Visitor,
    visit,
)

from .admin_view_field import AdminViewField, get_directives
from .errors import FragmentCycleError, UnknownFragmentError, UnsupportedSelectionError

logger = structlog.get_logger(__name__)


class _DirectiveStripper(Visitor):
    """Drops every directive node, at any depth."""

    def enter_directive(self, *_args):
        return REMOVE


class _SpreadCollector(Visitor):
    """Collects the names of fragment spreads, in document order."""

    def __init__(self) -> None:
        super().__init__()
        self.names: list[str] = []

    def enter_fragment_spread(self, node, *_args):
        self.names.append(node.name.value)


def strip_directives(node):
    """Return a copy of *node* without any directives."""
    return visit(node, _DirectiveStripper())


def spread_names(selection_set: SelectionSetNode | None) -> list[str]:
    """Names of all fragments spread anywhere inside *selection_set*."""
    if selection_set is None:
        return []
    collector = _SpreadCollector()
    visit(selection_set, collector)
    return collector.names


class FragmentResolver:
    """
    Resolves one admin view fragment.  Use a fresh instance per build.

    Args:
        ct_fields: Content-type descriptors keyed by field id, in schema
            order.  Mutated in place: consumed entries are removed.
        native_fragments: All fragment definitions available for spreading,
            keyed by name.  Never mutated.
        excluded_fields: Field names that must never become descriptors
            (password fields).
        view_id: Id of the view being built, for error reporting.

    After :meth:`resolve`, :attr:`fields` holds the descriptors of all
    selected fields in selection order.
    """

    def __init__(
        self,
        ct_fields: dict[str, AdminViewField],
        native_fragments: Mapping[str, FragmentDefinitionNode] | None = None,
        *,
        excluded_fields: frozenset[str] = frozenset(),
        view_id: str | None = None,
    ) -> None:
        self.ct_fields = ct_fields
        self.native_fragments = native_fragments or {}
        self.excluded_fields = excluded_fields
        self.view_id = view_id
        self.fields: list[AdminViewField] = []
        # Names of the fragments currently being expanded, outermost first.
        self._path: list[str] = []
        # Printed definitions in output order, and their names.
        self._blocks: list[str] = []
        self._printed: set[str] = set()

    def resolve(self, definition: FragmentDefinitionNode) -> str:
        """Resolve *definition* and return the cleaned fragment text."""
        self._resolve(copy.deepcopy(definition))
        return "\n".join(self._blocks)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve(self, fragment: FragmentDefinitionNode) -> None:
        fragment_name = fragment.name.value
        self._enter(fragment_name)

        for selection in fragment.selection_set.selections:
            if isinstance(selection, FragmentSpreadNode):
                self._resolve(self._clone_native(selection.name.value))
            elif isinstance(selection, FieldNode):
                self._add_field(selection)
                self._include_spreads(selection.selection_set)
            else:
                raise UnsupportedSelectionError(
                    selection.kind, fragment_name, view_id=self.view_id
                )

        self._path.pop()
        self._emit(fragment)

    def _include_spreads(self, selection_set: SelectionSetNode | None) -> None:
        for fragment_name in spread_names(selection_set):
            self._include(fragment_name)

    def _include(self, fragment_name: str) -> None:
        """Print a fragment spread below the top level, without descriptors."""
        if fragment_name in self._printed:
            return
        fragment = self._clone_native(fragment_name)
        self._enter(fragment_name)
        self._include_spreads(fragment.selection_set)
        self._path.pop()
        self._emit(fragment)

    def _emit(self, fragment: FragmentDefinitionNode) -> None:
        fragment_name = fragment.name.value
        if fragment_name in self._printed:
            return
        self._printed.add(fragment_name)
        self._blocks.append(print_ast(strip_directives(fragment)))

    def _enter(self, fragment_name: str) -> None:
        if fragment_name in self._path:
            cycle = self._path[self._path.index(fragment_name):] + [fragment_name]
            raise FragmentCycleError(cycle, view_id=self.view_id)
        self._path.append(fragment_name)

    def _clone_native(self, fragment_name: str) -> FragmentDefinitionNode:
        try:
            native = self.native_fragments[fragment_name]
        except KeyError:
            raise UnknownFragmentError(fragment_name, view_id=self.view_id) from None
        return copy.deepcopy(native)

    def _add_field(self, selection: FieldNode) -> None:
        own_name = selection.name.value
        field_id = selection.alias.value if selection.alias else own_name
        if own_name in self.excluded_fields or field_id in self.excluded_fields:
            logger.debug(
                "admin_view_field_excluded",
                view_id=self.view_id,
                field=own_name,
                alias=field_id,
            )
            return

        field_type = "id" if own_name == "id" else "text"
        name = None

        schema_field = self.ct_fields.get(own_name)
        if schema_field is not None:
            name = schema_field.name
            field_type = schema_field.field_type

        admin_field = AdminViewField.computed_field(
            field_id, own_name, field_type, name or field_id
        )

        consumed = self.ct_fields.pop(field_id, None)
        if consumed is not None:
            admin_field.merge_from(consumed)

        admin_field.directives = get_directives(selection, view_id=self.view_id)
        self.fields.append(admin_field)
