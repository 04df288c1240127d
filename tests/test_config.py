"""Tests for settings loading."""

from storefront_edge.app.core.config import Settings
from storefront_edge.app.core.edge import EdgeRequest, PassThrough, diagnostic_headers


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults_without_environment(self, monkeypatch):
        for name in ("RENDER_SERVICE_TOKEN", "PRERENDER_TOKEN", "STORE_URL", "SUPABASE_URL",
                     "VITE_SUPABASE_URL", "STORE_ANON_KEY", "SUPABASE_ANON_KEY",
                     "VITE_SUPABASE_ANON_KEY", "SITE_URL", "EDGE_DEBUG_HEADERS", "RENDER_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.render_service_url == "https://service.prerender.io"
        assert settings.render_timeout == 10.0
        assert settings.render_configured is False
        assert settings.store_configured is False
        assert settings.site_url is None
        assert settings.debug_headers is False

    def test_vite_names_are_accepted(self, monkeypatch):
        monkeypatch.delenv("STORE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("STORE_ANON_KEY", raising=False)
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        monkeypatch.setenv("VITE_SUPABASE_URL", "https://abc.supabase.co")
        monkeypatch.setenv("VITE_SUPABASE_ANON_KEY", "anon")

        settings = Settings.from_env()

        assert settings.store_url == "https://abc.supabase.co"
        assert settings.store_key == "anon"
        assert settings.store_configured is True

    def test_primary_name_wins(self, monkeypatch):
        monkeypatch.setenv("STORE_URL", "https://primary.test")
        monkeypatch.setenv("VITE_SUPABASE_URL", "https://fallback.test")

        assert Settings.from_env().store_url == "https://primary.test"

    def test_typed_values(self, monkeypatch):
        monkeypatch.setenv("RENDER_TIMEOUT", "2.5")
        monkeypatch.setenv("STORE_TIMEOUT", "not-a-number")
        monkeypatch.setenv("EDGE_DEBUG_HEADERS", "yes")
        monkeypatch.setenv("PRERENDER_TOKEN", "tok")

        settings = Settings.from_env()

        assert settings.render_timeout == 2.5
        assert settings.store_timeout == 10.0
        assert settings.debug_headers is True
        assert settings.render_service_token == "tok"
        assert settings.render_configured is True


class TestEdgeModel:
    """Tests for the request descriptor and diagnostics rendering."""

    def test_header_lookup_ignores_case(self):
        request = EdgeRequest(method="get", url="https://shop.test/a?b=1", headers={"User-Agent": "X"})

        assert request.header("user-agent") == "X"
        assert request.header("USER-AGENT") == "X"
        assert request.user_agent == "X"
        assert request.method == "GET"
        assert request.origin == "https://shop.test"
        assert request.path_with_query == "/a?b=1"

    def test_passthrough_drops_empty_extras(self):
        result = PassThrough.because("not-crawler", crawler="false", prerender_status=None)

        assert result.diagnostics == {"reason": "not-crawler", "crawler": "false"}

    def test_diagnostic_header_names_and_values(self):
        headers = diagnostic_headers({"prerender-status": "502", "error": "line one\nline two"})

        assert headers == {"X-Edge-Prerender-Status": "502", "X-Edge-Error": "line one line two"}
