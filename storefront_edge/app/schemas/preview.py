"""
Pydantic schema for the product fields read by the social preview.

Only ``title``, ``description`` and ``image_url`` are selected from the
data store.  A row without a title cannot produce a useful preview
card, so validation fails and the request passes through.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProductPreview(BaseModel):
    """Subset of a product/service record used for link previews."""

    title: str = Field(..., min_length=1, description="Product title shown on the preview card")
    description: Optional[str] = Field(None, description="Free-text description, may be null")
    image_url: Optional[str] = Field(None, description="Relative or absolute image URL, may be null")
