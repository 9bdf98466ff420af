"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import uuid

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def add(self, license: License) -> License:
        """
        Insert a new license.

        Args:
            license: License entity to insert

        Returns:
            Saved license entity

        Raises:
            LicenseKeyConflictError: If the license key is already taken
        """
        pass

    @abstractmethod
    def save(self, license: License) -> License:
        """
        Persist changes to an existing license.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        pass

    @abstractmethod
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    def find_by_key(self, license_key: str, for_update: bool = False) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: License key string
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    def find_by_checkout_session(self, session_id: str) -> Optional[License]:
        """
        Find the license issued for a payment checkout session.

        Args:
            session_id: Checkout session ID stored in the license metadata

        Returns:
            License entity or None if the session has no license yet
        """
        pass

    @abstractmethod
    def list(
        self,
        email: Optional[str] = None,
        plan: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[License]:
        """
        List licenses, newest first.

        Args:
            email: Substring filter on owner email
            plan: Exact plan filter
            limit: Page size
            offset: Page start

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license and, through cascade, its activations.

        Args:
            license_id: License UUID

        Returns:
            True if a license was deleted
        """
        pass

    @abstractmethod
    def stats(self) -> Dict:
        """
        Summarise the license table.

        Returns:
            Dict with total_licenses, expired_licenses and by_plan counts
        """
        pass
