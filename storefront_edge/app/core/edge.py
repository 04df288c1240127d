"""
Request descriptor and handler results for the edge layer.

Handlers never see the ASGI request directly.  They receive an
``EdgeRequest`` (method, absolute URL and headers) and return either
``Intercepted`` carrying a complete ``EdgeResponse`` or ``PassThrough``
telling the dispatcher to continue to the next handler or the origin.
A ``PassThrough`` may carry diagnostics that end up as ``X-Edge-*``
headers when debug headers are enabled.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

from starlette.requests import Request
from starlette.responses import Response


@dataclass
class EdgeRequest:
    """Minimal view of an inbound request.

    Header names are stored lower-cased so ``header("User-Agent")`` and
    ``header("user-agent")`` return the same value.
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = {name.lower(): value for name, value in self.headers.items()}

    @classmethod
    def from_starlette(cls, request: Request) -> "EdgeRequest":
        return cls(
            method=request.method,
            url=str(request.url),
            headers={name: value for name, value in request.headers.items()},
        )

    def header(self, name: str, default: str = "") -> str:
        return self.headers.get(name.lower(), default)

    @property
    def user_agent(self) -> str:
        return self.header("user-agent")

    @property
    def path(self) -> str:
        return urlsplit(self.url).path or "/"

    @property
    def query(self) -> str:
        return urlsplit(self.url).query

    @property
    def origin(self) -> str:
        parts = urlsplit(self.url)
        return f"{parts.scheme}://{parts.netloc}"

    @property
    def path_with_query(self) -> str:
        query = self.query
        return f"{self.path}?{query}" if query else self.path


@dataclass
class EdgeResponse:
    """A complete response produced by a handler."""

    body: str
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=dict)

    def to_starlette(self) -> Response:
        return Response(content=self.body, status_code=self.status_code, headers=self.headers)


@dataclass
class Intercepted:
    response: EdgeResponse


@dataclass
class PassThrough:
    """Continue normal handling.

    ``diagnostics`` maps short keys (``"crawler"``, ``"prerender-status"``)
    to values; the dispatcher renders them as ``X-Edge-<Key>`` headers.
    """

    diagnostics: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def because(cls, reason: str, **extra: Optional[str]) -> "PassThrough":
        diagnostics = {"reason": reason}
        for key, value in extra.items():
            if value is not None:
                diagnostics[key.replace("_", "-")] = str(value)
        return cls(diagnostics=diagnostics)


EdgeResult = Union[Intercepted, PassThrough]


def diagnostic_headers(diagnostics: Mapping[str, str]) -> Dict[str, str]:
    """Render diagnostics as ``X-Edge-*`` response headers."""
    headers = {}
    for key, value in diagnostics.items():
        name = "X-Edge-" + "-".join(part.capitalize() for part in key.split("-"))
        # Header values must be single-line latin-1.
        safe = " ".join(str(value).split()).encode("latin-1", "replace").decode("latin-1")
        headers[name] = safe[:512]
    return headers
