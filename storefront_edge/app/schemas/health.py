"""
Pydantic schema for the health endpoint.
"""

from pydantic import BaseModel, Field


class HealthRead(BaseModel):
    status: str = "ok"
    version: str
    render_configured: bool = Field(..., description="Rendering service URL and token are set")
    store_configured: bool = Field(..., description="Data store URL and key are set")
    crawler_agents_version: str
