"""
Crawler classification.

Pure functions deciding whether a User-Agent belongs to a search
engine, link unfurler or validator, and whether a path is exempt from
interception.  Matching is a case-insensitive substring test against
the shared allow-list: prerendering a human by mistake only costs some
latency, while missing a crawler leaves it with an empty app shell.
"""

import re
from typing import Iterable, Optional

from ..core.crawler_agents import (
    CRAWLER_AGENTS,
    PREVIEW_SEGMENTS,
    RESERVED_PREFIXES,
    STATIC_EXTENSIONS,
)

_STATIC_ASSET_RE = re.compile(
    r"\.(?:" + "|".join(re.escape(ext) for ext in STATIC_EXTENSIONS) + r")$",
    re.IGNORECASE,
)


def is_crawler(user_agent: Optional[str], agents: Iterable[str] = CRAWLER_AGENTS) -> bool:
    """Return True if ``user_agent`` contains any known signature."""
    if not user_agent:
        return False
    lowered = user_agent.lower()
    return any(agent.lower() in lowered for agent in agents)


def is_static_asset(path: str) -> bool:
    """Return True if ``path`` ends in a static file extension."""
    return bool(_STATIC_ASSET_RE.search(path or ""))


def is_reserved_path(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in RESERVED_PREFIXES)


def is_exempt(path: str) -> bool:
    """Static assets, platform-internal and API paths are never intercepted."""
    return is_static_asset(path) or is_reserved_path(path)


def extract_record_id(path: str) -> Optional[str]:
    """Return the record id of a ``/service/<id>`` or ``/product/<id>`` path.

    The id is the final path segment.  ``None`` is returned when the path
    has neither segment or the final segment is empty (``/product/``).
    """
    if not any(segment in path for segment in PREVIEW_SEGMENTS):
        return None
    record_id = path.split("/")[-1]
    return record_id or None
