"""
apps.content_types.validators
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Pure-Python validation engine for content-type field definitions.

No Django view, serializer, or model imports are allowed here so that this
module can be used as a standalone utility and tested without Django setup.

Public API:
    ContentTypeValidationError   – raised when validation finds one or more errors
    ContentTypeValidator.validate(fields) – validates a list of field definitions
"""
import re


# ---------------------------------------------------------------------------
# Exception
# ---------------------------------------------------------------------------

class ContentTypeValidationError(Exception):
    """
    Raised by :meth:`ContentTypeValidator.validate` when the supplied field
    definitions contain one or more structural errors.

    All errors are collected before this exception is raised so callers
    receive a complete picture of every problem at once.

    Attributes:
        errors (list[dict]): Non-empty list of error dicts, each with the
            shape ``{"field": "<dot-separated path>", "message": "<reason>"}``.
    """

    def __init__(self, errors: list[dict]) -> None:
        self.errors: list[dict] = errors
        super().__init__(str(errors))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

#: GraphQL ``Name`` production.  Field ids and type names must match it
#: because they end up verbatim in generated fragments.
_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

#: Optional keys that must hold booleans when present.
_BOOLEAN_KEYS: tuple[str, ...] = ("nonNull", "listOf", "required")

#: Complete set of keys a field definition may carry.
_VALID_KEYS: frozenset[str] = frozenset(
    {"id", "type", "returnType", "name", "description", *_BOOLEAN_KEYS}
)


def is_graphql_name(value: object) -> bool:
    """Return True if *value* is a string usable as a GraphQL name."""
    return isinstance(value, str) and bool(_NAME_RE.match(value))


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------

class ContentTypeValidator:
    """
    Stateless validator for the ``fields`` JSON contract stored on
    :class:`~apps.content_types.models.ContentTypeSchema`.

    Contract::

        [
            {
                "id": "title",            # required, GraphQL name, unique
                "type": "text",           # required, UI field-type tag
                "returnType": "String",   # optional, GraphQL name
                "name": "Title",          # optional display name
                "nonNull": true,          # optional bool
                "listOf": false,          # optional bool
                "required": true,         # optional bool
                "description": "..."      # optional string
            },
            ...
        ]
    """

    @staticmethod
    def validate(fields: list) -> None:
        """
        Validate *fields* against the field definition contract.

        Raises:
            ContentTypeValidationError: If one or more rules are violated.
                ``exc.errors`` contains the complete list.
        """
        errors: list[dict] = []

        if not isinstance(fields, list):
            errors.append({
                "field": "fields",
                "message": '"fields" must be a list of field definitions.',
            })
            raise ContentTypeValidationError(errors)

        seen_ids: set[str] = set()

        for index, field_def in enumerate(fields):
            field_path = f"fields.{index}"

            if not isinstance(field_def, dict):
                errors.append({
                    "field": field_path,
                    "message": "Field definition must be a dict.",
                })
                continue

            field_id = field_def.get("id")
            if field_id is None:
                errors.append({"field": field_path, "message": '"id" is required.'})
            elif not is_graphql_name(field_id):
                errors.append({
                    "field": f"{field_path}.id",
                    "message": f'"id" must be a valid GraphQL name; got {field_id!r}.',
                })
            elif field_id in seen_ids:
                errors.append({
                    "field": f"{field_path}.id",
                    "message": f'Duplicate field id "{field_id}".',
                })
            else:
                seen_ids.add(field_id)

            ContentTypeValidator._validate_field(
                field_path=field_path,
                field_def=field_def,
                errors=errors,
            )

        if errors:
            raise ContentTypeValidationError(errors)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_field(field_path: str, field_def: dict, errors: list[dict]) -> None:
        unknown_keys = set(field_def) - _VALID_KEYS
        if unknown_keys:
            errors.append({
                "field": field_path,
                "message": (
                    f"Unknown key(s): {sorted(unknown_keys)}. "
                    f"Allowed: {sorted(_VALID_KEYS)}."
                ),
            })

        field_type = field_def.get("type")
        if field_type is None:
            errors.append({"field": field_path, "message": '"type" is required.'})
        elif not isinstance(field_type, str) or not field_type:
            errors.append({
                "field": f"{field_path}.type",
                "message": '"type" must be a non-empty string.',
            })

        if "returnType" in field_def and not is_graphql_name(field_def["returnType"]):
            errors.append({
                "field": f"{field_path}.returnType",
                "message": '"returnType" must be a valid GraphQL type name.',
            })

        for key in _BOOLEAN_KEYS:
            if key in field_def and not isinstance(field_def[key], bool):
                errors.append({
                    "field": f"{field_path}.{key}",
                    "message": f'"{key}" must be a boolean.',
                })

        for key in ("name", "description"):
            value = field_def.get(key)
            if value is not None and not isinstance(value, str):
                errors.append({
                    "field": f"{field_path}.{key}",
                    "message": f'"{key}" must be a string.',
                })
