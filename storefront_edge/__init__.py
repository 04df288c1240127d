"""
Crawler-aware edge layer for the storefront.

Intercepts requests from search-engine crawlers and link unfurlers:
product pages get a synthesized Open Graph preview, other pages a
prerendered snapshot.  Everything else, and anything that fails,
continues to the storefront untouched.  The application lives in
``storefront_edge.app``.
"""

__all__ = []
