# src/shapeguard/plugins/builtin.py
"""Hook implementation for built-in plugins.

Exposes the string-format and numeric primitives as named plugins, so the
schema-text matcher can resolve type names like ``email`` or ``uuid``.
"""

from shapeguard.guards.primitives import guards
from shapeguard.plugins.hookspecs import hookimpl
from shapeguard.plugins.registry import Plugin


class ShapeguardBuiltinPlugins:
    """Hook implementer for built-in plugins."""

    @hookimpl
    def shapeguard_get_plugins(self) -> list[Plugin]:
        """Return built-in plugins."""
        return [
            Plugin(name="email", validate=guards.email, description="Address of the form local@domain.tld"),
            Plugin(name="url", validate=guards.url, description="Absolute URL (WHATWG parsing rules)"),
            Plugin(name="uuid", validate=guards.uuid, description="UUID, versions 1-5"),
            Plugin(name="iso8601_date", validate=guards.iso8601_date, description="ISO 8601 date or timestamp string"),
            Plugin(name="non_empty_string", validate=guards.non_empty_string, description="String with at least one character"),
            Plugin(name="integer", validate=guards.integer, description="Whole number"),
            Plugin(name="positive_number", validate=guards.positive_number, description="Finite number greater than zero"),
            Plugin(name="negative_number", validate=guards.negative_number, description="Finite number less than zero"),
        ]


# Singleton instance for registration
builtin_plugins = ShapeguardBuiltinPlugins()
