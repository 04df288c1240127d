"""
Social preview synthesizer.

Link unfurlers (WhatsApp, Facebook, Telegram, ...) read Open Graph and
Twitter Card tags from the raw HTML of a shared link.  For product and
service detail pages this service looks the record up in the data
store and answers with a small standalone document carrying those
tags, without involving the storefront application at all.

A human who somehow receives the document is sent on to the real page
twice over: by ``<meta http-equiv="refresh">`` and by a script
redirect, since unfurling clients differ in which one they honour.
The response is marked ``noindex`` so search engines never treat it
as the canonical page.
"""

import html
import json
import logging
import re
from typing import Iterable, Optional

import httpx

from ..core.config import Settings
from ..core.crawler_agents import CRAWLER_AGENTS
from ..core.edge import EdgeRequest, EdgeResponse, EdgeResult, Intercepted, PassThrough
from ..schemas.preview import ProductPreview
from .crawler_service import extract_record_id, is_crawler
from .store_service import StoreError, StoreService

logger = logging.getLogger(__name__)

META_DESCRIPTION_LIMIT = 160
SOCIAL_DESCRIPTION_LIMIT = 200
OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630

_ABSOLUTE_URL_RE = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.\-]*:|//)")

PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html lang="ar" dir="rtl">
<head>
  <meta charset="UTF-8">
  <title>{page_title}</title>
  <meta name="description" content="{meta_description}">

  <meta property="og:type" content="product">
  <meta property="og:url" content="{url}">
  <meta property="og:title" content="{title}">
  <meta property="og:description" content="{social_description}">
  <meta property="og:image" content="{image}">
  <meta property="og:image:width" content="{image_width}">
  <meta property="og:image:height" content="{image_height}">

  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:title" content="{title}">
  <meta name="twitter:description" content="{social_description}">
  <meta name="twitter:image" content="{image}">

  <meta http-equiv="refresh" content="0;url={url}">
</head>
<body>
  <h1>{title}</h1>
  <p>{description}</p>
  <img src="{image}" alt="{title}">
  <script>window.location.href = {url_js};</script>
</body>
</html>
"""


def absolute_image_url(image_url: Optional[str], origin: str) -> Optional[str]:
    """Prefix relative image paths with ``origin``.

    Values that already carry a scheme (``https:``, ``data:``) or are
    protocol-relative are returned unchanged.
    """
    if not image_url:
        return None
    if _ABSOLUTE_URL_RE.match(image_url):
        return image_url
    separator = "" if image_url.startswith("/") else "/"
    return f"{origin}{separator}{image_url}"


def render_preview(preview: ProductPreview, url: str, image: Optional[str], site_name: str) -> str:
    """Build the preview document for one product.

    Output depends only on the arguments, so identical inputs give
    byte-identical HTML.
    """
    description = preview.description or ""
    page_title = f"{preview.title} | {site_name}" if site_name else preview.title
    # json.dumps yields a valid JS string literal; "</" is split so the
    # value cannot close the script element.
    url_js = json.dumps(url).replace("</", "<\\/")
    return PREVIEW_TEMPLATE.format(
        page_title=html.escape(page_title),
        title=html.escape(preview.title),
        meta_description=html.escape(description[:META_DESCRIPTION_LIMIT]),
        social_description=html.escape(description[:SOCIAL_DESCRIPTION_LIMIT]),
        description=html.escape(description),
        url=html.escape(url),
        url_js=url_js,
        image=html.escape(image or ""),
        image_width=OG_IMAGE_WIDTH,
        image_height=OG_IMAGE_HEIGHT,
    )


class SocialPreviewService:
    """Answer crawler requests for product pages with a preview card document."""

    name = "social-preview"

    def __init__(
        self,
        settings: Settings,
        store: Optional[StoreService] = None,
        agents: Iterable[str] = CRAWLER_AGENTS,
    ) -> None:
        self.settings = settings
        self.store = store or StoreService(settings)
        self.agents = agents

    async def handle(self, request: EdgeRequest) -> EdgeResult:
        if not is_crawler(request.user_agent, self.agents):
            return PassThrough.because("not-crawler", crawler="false")

        record_id = extract_record_id(request.path)
        if record_id is None:
            return PassThrough.because("not-product-path", crawler="true")

        if not self.store.configured:
            logger.warning("Data store credentials missing; skipping social preview for %s", request.path)
            return PassThrough.because("store-not-configured", crawler="true")

        try:
            preview = await self.store.get_preview(record_id)
        except (httpx.HTTPError, StoreError) as exc:
            logger.error("Social preview lookup failed for id %s: %s", record_id, exc)
            return PassThrough.because("store-error", crawler="true", error=str(exc) or type(exc).__name__)

        if preview is None:
            logger.info("No record %s in data store; passing through", record_id)
            return PassThrough.because("record-not-found", crawler="true", record_id=record_id)

        image = absolute_image_url(preview.image_url, request.origin)
        if image is None:
            image = absolute_image_url(self.settings.default_image, request.origin)

        body = render_preview(preview, request.url, image, self.settings.site_name)
        logger.info("Served social preview for %s to %r", request.path, request.user_agent)
        return Intercepted(
            EdgeResponse(
                body=body,
                headers={
                    "Content-Type": "text/html; charset=utf-8",
                    "X-Robots-Tag": "noindex",
                },
            )
        )
