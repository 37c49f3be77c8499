"""Custom scalar handlers for sdk generation.

Maps GraphQL scalar names to the Python annotations used in generated
signatures, together with the import each annotation needs.

Example usage:
    from gql_sdkgen.core.scalars import ScalarRegistry

    class MoneyHandler:
        python_type = "Decimal"
        import_statement = "from decimal import Decimal"

    registry = ScalarRegistry()
    registry.register("Money", MoneyHandler())
    registry.python_type("Money")  # "Decimal"
"""

from typing import Protocol, runtime_checkable

# GraphQL built-in scalars
BUILTIN_SCALARS = {
    "ID": "str",
    "String": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
}


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for custom scalar handlers.

    Attributes:
        python_type: The Python type name (e.g., "datetime", "Decimal")
        import_statement: The import needed for this type (e.g., "from datetime import datetime")
    """

    python_type: str
    import_statement: str


class DateTimeHandler:
    """Handler for DateTime scalars."""

    python_type = "datetime"
    import_statement = "from datetime import datetime"


class DateHandler:
    """Handler for Date scalars."""

    python_type = "date"
    import_statement = "from datetime import date"


class UUIDHandler:
    """Handler for UUID scalars."""

    python_type = "UUID"
    import_statement = "from uuid import UUID"


class JSONHandler:
    """Handler for JSON scalars (pass-through)."""

    python_type = "Any"
    import_statement = "from typing import Any"


class ScalarRegistry:
    """Registry for custom scalar handlers.

    Resolves GraphQL type names to Python annotations and remembers which
    handlers were used, so the generated module only imports what it needs.

    Example:
        registry = ScalarRegistry()
        registry.python_type("DateTime")  # "datetime"
        registry.used_imports()           # {"from datetime import datetime"}
    """

    def __init__(self, scalars: dict[str, str] | None = None):
        self._handlers: dict[str, ScalarHandler] = {}
        self._used: set[str] = set()
        # Configured scalars that need no import
        self._aliases: dict[str, str] = dict(scalars or {})
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        self.register("DateTime", DateTimeHandler())
        self.register("Date", DateHandler())
        self.register("UUID", UUIDHandler())
        self.register("JSON", JSONHandler())
        self.register("JSONObject", JSONHandler())

    def register(self, scalar_name: str, handler: ScalarHandler):
        """Register a handler for a scalar type."""
        self._handlers[scalar_name] = handler

    def python_type(self, type_name: str) -> str | None:
        """The Python annotation for a scalar, or None if it is not a known scalar.

        Configured scalars take precedence over registered handlers.
        """
        if type_name in BUILTIN_SCALARS:
            return BUILTIN_SCALARS[type_name]
        if type_name in self._aliases:
            return self._aliases[type_name]
        handler = self._handlers.get(type_name)
        if handler is None:
            return None
        self._used.add(type_name)
        return handler.python_type

    def used_imports(self) -> set[str]:
        """Import statements for the handlers resolved so far."""
        return {self._handlers[name].import_statement for name in self._used}
