# src/shapeguard/plugins/registry.py
"""Plugin registry: named guard extensions.

A PluginRegistry is an explicit context object. Create one, register
plugins at startup, and pass it to the places that resolve guards by name
(``create_guard(registry=...)``, ``SchemaTextValidator(registry=...)``).
There is no process-global registry.

Semantics:
- keys are plugin names, unique within a registry
- registering a name that already exists replaces the old plugin
- there is no removal

Registration is expected to happen before validation starts. The registry
does no locking of its own; concurrent lookups are safe as long as nothing
registers at the same time.

Uses pluggy for hook-based plugin discovery.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import pluggy
import structlog

from shapeguard.errors import SchemaError
from shapeguard.plugins.hookspecs import PROJECT_NAME, ShapeguardPluginSpec

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Plugin:
    """A named guard.

    Frozen for immutability - a registered plugin never changes; replace it
    by registering a new one under the same name.
    """

    name: str
    validate: Callable[[Any], object]
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise SchemaError(f"Plugin name must be a non-empty string, got {self.name!r}")
        if not callable(self.validate):
            raise SchemaError(
                f"Plugin '{self.name}' must define a callable 'validate', "
                f"got {type(self.validate).__name__}"
            )


class PluginRegistry:
    """Registry mapping plugin names to plugins.

    Usage:
        registry = PluginRegistry()
        registry.register(Plugin(name="port", validate=is_port))
        registry.register_builtin_plugins()

        port = registry.get("port")
        port.validate(8080)
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ShapeguardPluginSpec)
        self._plugins: dict[str, Plugin] = {}

    # === Registration ===

    def register(self, plugin: Plugin) -> None:
        """Register a plugin, replacing any plugin with the same name.

        Args:
            plugin: Plugin record to register

        Raises:
            SchemaError: If plugin is not a Plugin
        """
        if not isinstance(plugin, Plugin):
            raise SchemaError(
                f"Expected a Plugin, got {type(plugin).__name__}. "
                f"Wrap guards as Plugin(name=..., validate=...)."
            )

        previous = self._plugins.get(plugin.name)
        self._plugins[plugin.name] = plugin
        if previous is not None and previous is not plugin:
            logger.info("Plugin replaced", plugin=plugin.name)
        else:
            logger.debug("Plugin registered", plugin=plugin.name)

    def register_hooks(self, implementer: object) -> list[Plugin]:
        """Register a pluggy hook implementer and the plugins it provides.

        Only the new implementer's hooks are called, so plugins registered
        earlier (directly or through other implementers) are not re-applied.

        Args:
            implementer: Object with ``@hookimpl shapeguard_get_plugins``

        Returns:
            The plugins that were registered
        """
        self._pm.register(implementer)
        return self._collect_from([implementer])

    def register_builtin_plugins(self) -> list[Plugin]:
        """Register the built-in plugins (email, url, uuid, ...).

        Call this once at startup to make built-in plugins resolvable by name.
        """
        from shapeguard.plugins.builtin import builtin_plugins

        if self._pm.is_registered(builtin_plugins):
            return []
        return self.register_hooks(builtin_plugins)

    def load_entrypoint_plugins(self) -> list[Plugin]:
        """Load plugin implementers advertised in the ``shapeguard`` entry-point group.

        Returns:
            The plugins that were registered
        """
        before = self._pm.get_plugins()
        count = self._pm.load_setuptools_entrypoints(PROJECT_NAME)
        new_implementers = [p for p in self._pm.get_plugins() if p not in before]
        logger.debug("Entry-point plugins loaded", implementers=count)
        return self._collect_from(new_implementers)

    def _collect_from(self, implementers: Iterable[object]) -> list[Plugin]:
        wanted = list(implementers)
        others = [p for p in self._pm.get_plugins() if all(p is not w for w in wanted)]
        caller = self._pm.subset_hook_caller("shapeguard_get_plugins", remove_plugins=others)

        registered: list[Plugin] = []
        # pluggy calls implementations in LIFO order; reverse to keep registration order
        for plugins in reversed(caller()):
            for plugin in plugins:
                self.register(plugin)
                registered.append(plugin)
        return registered

    # === Lookup ===

    def get(self, name: str) -> Plugin | None:
        """Get plugin by name, or None if absent."""
        return self._plugins.get(name)

    def names(self) -> list[str]:
        """Names of all registered plugins, in registration order."""
        return list(self._plugins)

    def plugins(self) -> list[Plugin]:
        """All registered plugins, in registration order."""
        return list(self._plugins.values())

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)
