"""
Origin routes serving the single-page storefront.

This is what ``call_next`` reaches when no edge handler intercepts.
Files that exist in the build directory are served as-is; every other
path gets the application's ``index.html`` so client-side routing can
take over.  When no build is present a bare shell is returned, which
is exactly what a crawler sees without prerendering.
"""

import html
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse, HTMLResponse, Response

router = APIRouter()

FALLBACK_SHELL = """<!DOCTYPE html>
<html lang="ar" dir="rtl">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
</head>
<body>
  <div id="root"></div>
</body>
</html>
"""


def _resolve_file(dist_dir: Path, full_path: str):
    """Return the file under ``dist_dir`` for ``full_path``, or None.

    Paths escaping ``dist_dir`` (``../``) are rejected.
    """
    if not full_path:
        return None
    root = dist_dir.resolve()
    candidate = (root / full_path).resolve()
    if root != candidate and root not in candidate.parents:
        return None
    return candidate if candidate.is_file() else None


@router.api_route("/{full_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
async def serve_storefront(full_path: str, request: Request) -> Response:
    if full_path.startswith("api/"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    settings = request.app.state.settings
    dist_dir = Path(settings.spa_dist_dir)

    asset = _resolve_file(dist_dir, full_path)
    if asset is not None:
        return FileResponse(asset)

    index = dist_dir / "index.html"
    if index.is_file():
        return HTMLResponse(index.read_text(encoding="utf-8"))
    return HTMLResponse(FALLBACK_SHELL.format(title=html.escape(settings.site_name)))
