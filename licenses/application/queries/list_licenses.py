"""
ListLicensesQuery.

Query to page through licenses from the admin API.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ListLicensesQuery:
    """Query to list licenses, optionally filtered."""

    email: Optional[str] = None
    plan: Optional[str] = None
    limit: int = 50
    offset: int = 0
