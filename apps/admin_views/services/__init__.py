"""
apps.admin_views.services package.
"""
from .admin_view import (  # noqa: F401
    DEFAULT_TITLE_PATTERN,
    AdminView,
    AdminViewBuilder,
    AdminViewSettings,
)
from .admin_view_field import AdminViewField  # noqa: F401
from .errors import (  # noqa: F401
    AdminViewBuildError,
    DuplicateAdminViewError,
    FragmentCycleError,
    InvalidSettingsError,
    MissingInputError,
    UnknownFragmentError,
    UnresolvedVariableError,
    UnsupportedSelectionError,
)
from .type_manager import AdminViewTypeManager  # noqa: F401
