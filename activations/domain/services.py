"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from dataclasses import dataclass
from typing import List, Optional

from activations.domain.activation import Activation
from activations.domain.classifier import classify
from core.domain.exceptions import ActivationLimitReachedError
from licenses.domain.license import License


@dataclass(frozen=True)
class SeatUsage:
    """Active activations of a license split by environment."""

    production: int
    development: int

    @property
    def total(self) -> int:
        return self.production + self.development


class SeatManager:
    """Domain service for the production activation cap."""

    @staticmethod
    def usage(activations: List[Activation]) -> SeatUsage:
        """
        Count active activations by environment.

        Args:
            activations: Activations of one license

        Returns:
            SeatUsage with production and development counts
        """
        active = [a for a in activations if a.is_active]
        development = sum(1 for a in active if a.is_development)
        return SeatUsage(production=len(active) - development, development=development)

    @staticmethod
    def find_active(activations: List[Activation], domain: str) -> Optional[Activation]:
        """Return the active activation for ``domain``, if any."""
        for activation in activations:
            if activation.is_active and activation.domain == domain:
                return activation
        return None

    @staticmethod
    def ensure_capacity(license: License, activations: List[Activation], domain: str) -> None:
        """
        Check a new activation of ``domain`` fits under the cap.

        Development domains always fit.

        Args:
            license: License entity
            activations: Currently active activations of the license
            domain: Domain about to be activated

        Raises:
            ActivationLimitReachedError: If a production domain would exceed the cap
        """
        if classify(domain).is_development:
            return
        if SeatManager.usage(activations).production >= license.max_activations:
            raise ActivationLimitReachedError(license.max_activations)

    @staticmethod
    def ensure_within_cap(license: License, activations: List[Activation]) -> None:
        """
        Check the cap holds after an activation has been written.

        Args:
            license: License entity
            activations: Active activations read back after the write

        Raises:
            ActivationLimitReachedError: If production activations exceed the cap
        """
        if SeatManager.usage(activations).production > license.max_activations:
            raise ActivationLimitReachedError(license.max_activations)

    @staticmethod
    def remaining(license: License, activations: List[Activation]) -> int:
        """
        Production slots still free.

        Args:
            license: License entity
            activations: Active activations of the license

        Returns:
            max_activations minus active production activations
        """
        return license.max_activations - SeatManager.usage(activations).production
