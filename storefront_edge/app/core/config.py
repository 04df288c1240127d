"""
Configuration for the edge layer.

Values are read from environment variables into a ``Settings``
dataclass.  The object is built once per process (see
``Settings.from_env``) and handed to every handler explicitly, so
nothing below the app factory reads ``os.environ`` directly.  Several
variables accept alternate names so the same ``.env`` file used by the
storefront build (``VITE_SUPABASE_URL`` and friends) works unchanged.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty environment variable among ``names``."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value.strip()
    return default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class Settings:
    """Edge layer settings.

    Every field has a safe default.  Missing credentials do not raise;
    the handler that needs them passes the request through instead.
    """

    project_name: str = "Storefront Edge"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # External rendering service.  The token header name depends on the
    # provider; prerender.io expects ``X-Prerender-Token``.
    render_service_url: str = "https://service.prerender.io"
    render_service_token: Optional[str] = None
    render_token_header: str = "X-Prerender-Token"
    render_engine: str = "prerender.io"
    render_timeout: float = 10.0

    # Hosted data store (PostgREST interface).
    store_url: Optional[str] = None
    store_key: Optional[str] = None
    store_table: str = "services"
    store_timeout: float = 10.0

    # Canonical site URL.  When unset the request's own origin is used.
    site_url: Optional[str] = None
    site_name: str = "معرض السماح للمفروشات"
    default_image: str = "/logo.png"

    debug_headers: bool = False
    spa_dist_dir: str = "dist"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        defaults = cls()
        return cls(
            project_name=_env("PROJECT_NAME", default=defaults.project_name),
            api_version=_env("API_VERSION", default=defaults.api_version),
            log_level=_env("LOG_LEVEL", default=defaults.log_level),
            log_file=_env("LOG_FILE"),
            render_service_url=_env("RENDER_SERVICE_URL", "PRERENDER_URL", default=defaults.render_service_url),
            render_service_token=_env("RENDER_SERVICE_TOKEN", "PRERENDER_TOKEN"),
            render_token_header=_env("RENDER_TOKEN_HEADER", default=defaults.render_token_header),
            render_engine=_env("RENDER_ENGINE", default=defaults.render_engine),
            render_timeout=_env_float("RENDER_TIMEOUT", defaults.render_timeout),
            store_url=_env("STORE_URL", "SUPABASE_URL", "VITE_SUPABASE_URL"),
            store_key=_env("STORE_ANON_KEY", "SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
            store_table=_env("STORE_TABLE", default=defaults.store_table),
            store_timeout=_env_float("STORE_TIMEOUT", defaults.store_timeout),
            site_url=_env("SITE_URL"),
            site_name=_env("SITE_NAME", default=defaults.site_name),
            default_image=_env("DEFAULT_OG_IMAGE", default=defaults.default_image),
            debug_headers=_env_bool("EDGE_DEBUG_HEADERS"),
            spa_dist_dir=_env("SPA_DIST_DIR", default=defaults.spa_dist_dir),
        )

    @property
    def render_configured(self) -> bool:
        return bool(self.render_service_url and self.render_service_token)

    @property
    def store_configured(self) -> bool:
        return bool(self.store_url and self.store_key)


# Instantiate settings once so the app factory can import it.  Tests
# construct their own ``Settings`` and pass it to ``create_app``.
settings = Settings.from_env()
