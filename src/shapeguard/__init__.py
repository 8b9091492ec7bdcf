"""shapeguard: composable runtime type guards and schema-text validation.

Two ways to describe the shape you expect:

- Build guards in code with the combinators:

      from shapeguard import create_guard, guards

      g = create_guard()
      is_user = g.object({"id": guards.number, "email": guards.email})
      is_user({"id": 1, "email": "ada@example.com"})  # True

- Write interface-style schema text and validate parsed JSON against it:

      from shapeguard import validate_text

      result = validate_text("{ id: number; tags: string[]; }", payload)
      result.valid, result.errors
"""

__version__ = "0.2.0"

from shapeguard.contracts import UNDEFINED, CheckResult, MatchResult, UnknownTypePolicy
from shapeguard.errors import GuardError, SchemaError, SchemaSyntaxError, ShapeguardError
from shapeguard.guards import PRIMITIVE_GUARDS, Guard, GuardBuilder, create_guard, guards
from shapeguard.plugins import Plugin, PluginRegistry
from shapeguard.schema_text import SchemaTextValidator, parse_schema, validate_text

__all__ = [
    "__version__",
    "CheckResult",
    "Guard",
    "GuardBuilder",
    "GuardError",
    "MatchResult",
    "PRIMITIVE_GUARDS",
    "Plugin",
    "PluginRegistry",
    "SchemaError",
    "SchemaSyntaxError",
    "SchemaTextValidator",
    "ShapeguardError",
    "UNDEFINED",
    "UnknownTypePolicy",
    "create_guard",
    "guards",
    "parse_schema",
    "validate_text",
]
