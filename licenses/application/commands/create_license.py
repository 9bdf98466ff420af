"""
CreateLicenseCommand.

Command to issue a new license key.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import DEFAULT_PLAN, LicenseMetadata


@dataclass
class CreateLicenseCommand:
    """
    Command to create a license.

    Used by the admin API, the CLI and purchase webhooks alike.
    """

    email: str
    plan: str = DEFAULT_PLAN
    max_activations: int = 1
    expires_at: Optional[datetime] = None
    product_id: Optional[uuid.UUID] = None
    metadata: Optional[LicenseMetadata] = None
