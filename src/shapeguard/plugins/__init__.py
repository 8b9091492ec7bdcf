# src/shapeguard/plugins/__init__.py
"""Plugin system: named guards via pluggy.

- Plugin: a name bound to a guard
- PluginRegistry: explicit, instance-scoped name -> plugin table
- Hookspecs: pluggy hook definitions for contributing plugins
"""

from shapeguard.plugins.hookspecs import hookimpl, hookspec
from shapeguard.plugins.registry import Plugin, PluginRegistry

__all__ = [
    "Plugin",
    "PluginRegistry",
    "hookimpl",
    "hookspec",
]
