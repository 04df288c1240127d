"""
Shared crawler allow-list and interception exemptions.

Both the prerender gateway and the social preview synthesizer match
user agents against ``CRAWLER_AGENTS``.  Keep a single list here and
bump ``CRAWLER_AGENTS_VERSION`` whenever it changes so the health
endpoint shows which list a deployment is running.

Signatures are matched as case-insensitive substrings of the
User-Agent header, so short entries such as ``"Telegram"`` also cover
``TelegramBot``.
"""

from typing import Tuple

CRAWLER_AGENTS_VERSION = "2024.2"

CRAWLER_AGENTS: Tuple[str, ...] = (
    # Rendering service's own fetcher
    "Prerender",
    # Search engines
    "Googlebot",
    "Google-InspectionTool",
    "Bingbot",
    "Yandex",
    "DuckDuckBot",
    "Baiduspider",
    "Applebot",
    "rogerbot",
    # Social networks and messengers (link unfurlers)
    "facebookexternalhit",
    "Twitterbot",
    "LinkedInBot",
    "Pinterest",
    "Slackbot",
    "vkShare",
    "WhatsApp",
    "Telegram",
    "Discordbot",
    "Instagram",
    "quora link preview",
    "showyoubot",
    "outbrain",
    "embedly",
    # Validators
    "W3C_Validator",
)

STATIC_EXTENSIONS: Tuple[str, ...] = (
    "js",
    "css",
    "png",
    "jpg",
    "jpeg",
    "gif",
    "ico",
    "svg",
    "woff",
    "woff2",
    "ttf",
    "eot",
    "json",
    "xml",
    "txt",
    "webp",
    "mp4",
    "mp3",
)

# Platform-internal and API paths must reach the origin untouched.
RESERVED_PREFIXES: Tuple[str, ...] = ("/.netlify/", "/api/")

# Path segments that identify a product detail page.
PREVIEW_SEGMENTS: Tuple[str, ...] = ("/service/", "/product/")

# Request header the rendering service sets on its own page fetches.
RENDER_FETCH_HEADER = "X-Prerender"
