"""
apps.admin_views.services.errors
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Exceptions raised while building admin views.

Pure Python; the service layer converts these into
:class:`common.exceptions.InvalidAdminViewError` for the HTTP API.
"""
from __future__ import annotations


class AdminViewBuildError(Exception):
    """Base class for every admin view construction failure."""

    def __init__(self, message: str, *, view_id: str | None = None) -> None:
        self.view_id = view_id
        super().__init__(message)


class MissingInputError(AdminViewBuildError):
    """Neither a content type nor a fragment definition was supplied."""


class UnknownFragmentError(AdminViewBuildError):
    """A fragment spread references a fragment that is not defined."""

    def __init__(self, fragment_name: str, *, view_id: str | None = None) -> None:
        self.fragment_name = fragment_name
        super().__init__(f'Unknown fragment "{fragment_name}".', view_id=view_id)


class FragmentCycleError(AdminViewBuildError):
    """A fragment spreads itself, directly or through other fragments."""

    def __init__(self, path: list[str], *, view_id: str | None = None) -> None:
        self.path = path
        super().__init__(
            "Fragment spreads form a cycle: " + " -> ".join(path),
            view_id=view_id,
        )


class UnsupportedSelectionError(AdminViewBuildError):
    """
    A top-level selection is neither a field nor a fragment spread.

    Inline fragments are rejected rather than passed through: they carry no
    field id the admin UI could render.
    """

    def __init__(self, kind: str, fragment_name: str, *, view_id: str | None = None) -> None:
        self.kind = kind
        self.fragment_name = fragment_name
        super().__init__(
            f'Unsupported selection "{kind}" in fragment "{fragment_name}"; '
            "only fields and fragment spreads are allowed.",
            view_id=view_id,
        )


class DuplicateAdminViewError(AdminViewBuildError):
    """Two admin views resolve to the same id."""


class UnresolvedVariableError(AdminViewBuildError):
    """A directive argument refers to a query variable."""

    def __init__(
        self, directive: str, argument: str, *, view_id: str | None = None
    ) -> None:
        self.directive = directive
        self.argument = argument
        super().__init__(
            f'Argument "{argument}" of directive "@{directive}" uses a variable; '
            "directive arguments must be literal values.",
            view_id=view_id,
        )


class InvalidSettingsError(AdminViewBuildError):
    """The ``settings`` directive argument does not have the expected shape."""
