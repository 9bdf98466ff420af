"""
Product management commands.

Commands used by the admin API to maintain the product catalogue.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class CreateProductCommand:
    """Command to register a new product."""

    slug: str
    name: str
    description: str = ""
    current_version: str = "1.0.0"
    download_url: Optional[str] = None
    changelog: str = ""


@dataclass
class UpdateProductCommand:
    """
    Command to change product fields.

    Only the keys present in ``changes`` are applied.
    """

    product_id: uuid.UUID
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DeactivateProductCommand:
    """Command to soft-delete a product."""

    product_id: uuid.UUID
