"""
Shared API schemas for fleetctl.
Provides type-safe contracts for the fleet-management API.
"""

__version__ = "0.1.0"

# Export commonly used schemas
from fleet_schemas.common import *  # noqa: F403, F401
from fleet_schemas.device import *  # noqa: F403, F401
