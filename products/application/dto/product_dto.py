"""
Product DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ProductStatsDTO:
    """DTO for per-product license counts."""

    total_licenses: int
    active_licenses: int
    lifetime_licenses: int


@dataclass
class ProductDTO:
    """DTO for product information."""

    id: uuid.UUID
    slug: str
    name: str
    description: str
    current_version: str
    download_url: Optional[str]
    changelog: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    stats: Optional[ProductStatsDTO] = None
