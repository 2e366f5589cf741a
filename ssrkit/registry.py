"""Look up obfuscation plugins by the name used in the configuration."""

from __future__ import annotations

import logging

from .http_simple import HttpPost, HttpSimple
from .obfs import Obfs, ServerInfo
from .obfsutil import init_shift128plus

log = logging.getLogger(__name__)

_PASSTHROUGH = frozenset({"origin", "plain"})

_PLUGINS: dict[str, type[Obfs]] = {
    "http_simple": HttpSimple,
    "http_post": HttpPost,
}


def get_obfs_class(name: str | None) -> type[Obfs] | None:
    """Return the plugin class registered under *name*.

    Returns None for no name and for the pass-through names ``origin``
    and ``plain``. An unknown name is logged and also gives None.
    """
    if name is None or name in _PASSTHROUGH:
        return None
    init_shift128plus()
    plugin = _PLUGINS.get(name)
    if plugin is None:
        log.error("Load obfs '%s' failed", name)
    return plugin


def create_obfs(name: str | None, server: ServerInfo | None = None) -> Obfs | None:
    """Create the plugin named *name* for *server*, or None if there is none."""
    plugin = get_obfs_class(name)
    if plugin is None:
        return None
    return plugin(server)