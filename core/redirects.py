from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from django.conf import settings

logger = logging.getLogger(__name__)

RedirectTable = Mapping[str, str]

_table: RedirectTable = MappingProxyType({})


def resolve(path: str, table: RedirectTable) -> Optional[str]:
    """Follow *table* from *path* to the final redirect target.

    Returns the final path, or None when no redirect applies. A chain that
    revisits a path (including a path mapped to itself) is treated as "no
    redirect" and logged so the table can be fixed.
    """
    chain = [path]
    visited = {path}
    current = path
    while current in table:
        target = table[current]
        if target in visited:
            logger.error(
                "Redirect loop detected at %s. Chain: %s",
                target,
                " -> ".join(chain + [target]),
            )
            return None
        visited.add(target)
        chain.append(target)
        current = target
    return current if current != path else None


def load_redirect_table(source: Optional[Mapping[str, str]] = None) -> RedirectTable:
    """Freeze *source* (default ``settings.STOREFRONT_REDIRECTS``) into the process-wide table."""
    global _table
    raw = source if source is not None else getattr(settings, "STOREFRONT_REDIRECTS", {}) or {}
    _table = MappingProxyType({str(k): str(v) for k, v in dict(raw).items()})
    logger.info("Loaded %d redirect rule(s)", len(_table))
    return _table


def get_redirect_table() -> RedirectTable:
    return _table
