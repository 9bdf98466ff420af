"""
Activation repository port (interface).

This defines the contract for activation persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from activations.domain.activation import Activation


class ActivationRepository(ABC):
    """
    Abstract repository for Activation entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def add(self, activation: Activation) -> Activation:
        """
        Insert a new activation.

        Args:
            activation: Activation entity to insert

        Returns:
            Saved activation entity

        Raises:
            DuplicateActivationError: If the (license, domain) pair already has a row
        """
        pass

    @abstractmethod
    def save(self, activation: Activation) -> Activation:
        """
        Persist changes to an existing activation.

        Args:
            activation: Activation entity to save

        Returns:
            Saved activation entity
        """
        pass

    @abstractmethod
    def find_by_license_and_domain(
        self, license_id: uuid.UUID, domain: str
    ) -> Optional[Activation]:
        """
        Find the activation row for a (license, domain) pair, active or not.

        Args:
            license_id: License UUID
            domain: Domain name

        Returns:
            Activation entity or None if not found
        """
        pass

    @abstractmethod
    def find_active_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        """
        Find all active activations for a license.

        Args:
            license_id: License UUID

        Returns:
            List of active Activation entities
        """
        pass

    @abstractmethod
    def find_all_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        """
        Find all activations for a license (active and inactive).

        Args:
            license_id: License UUID

        Returns:
            List of Activation entities
        """
        pass

    @abstractmethod
    def count_active(self) -> int:
        """
        Count active activations across all licenses.

        Returns:
            Number of active activations
        """
        pass

    @abstractmethod
    def recent_active(self, limit: int = 10) -> List[dict]:
        """
        Latest active activations with their license key and owner email.

        Args:
            limit: Maximum rows

        Returns:
            List of dicts with domain, activated_at, license_key and email
        """
        pass
