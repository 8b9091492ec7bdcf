"""pluggy hook specifications for shapeguard plugins.

Packages contribute named guards by implementing these hooks. The plugin
registry calls them when a hook implementer is registered.

Usage (implementing a plugin):
    from shapeguard.plugins import Plugin, hookimpl

    class MyGuards:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def shapeguard_get_plugins(self):
            return [Plugin(name="port", validate=is_port)]

Third-party packages can expose an implementer through the ``shapeguard``
entry-point group; see ``PluginRegistry.load_entrypoint_plugins``.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from shapeguard.plugins.registry import Plugin

# Project name for pluggy, also the entry-point group
PROJECT_NAME = "shapeguard"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class ShapeguardPluginSpec:
    """Hook specifications for guard plugins."""

    @hookspec
    def shapeguard_get_plugins(self) -> list["Plugin"]:  # type: ignore[empty-body]
        """Return guard plugins.

        Returns:
            List of Plugin records (name + validate guard)
        """
