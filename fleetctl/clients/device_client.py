"""
Fleet API device client.
Fetches a single device with the fields and relations `fleetctl device` shows.
"""

import logging
from typing import Dict, List, Tuple, Union

import httpx

from fleetctl.core.config import settings
from fleetctl.core.exceptions import (
    AmbiguousDeviceError,
    AuthError,
    DeviceNotFoundError,
    NetworkError,
)
from fleet_schemas.common import ODataResponse
from fleet_schemas.device import Device

logger = logging.getLogger(__name__)


DEVICE_SELECT: List[str] = [
    "device_name",
    "id",
    "overall_status",
    "is_online",
    "ip_address",
    "mac_address",
    "last_connectivity_event",
    "uuid",
    "supervisor_version",
    "is_web_accessible",
    "note",
    "os_version",
    "memory_usage",
    "memory_total",
    "public_address",
    "storage_block_device",
    "storage_usage",
    "storage_total",
    "cpu_usage",
    "cpu_temp",
    "cpu_id",
    "is_undervolted",
]

# relation -> fields selected from the related resource
DEVICE_EXPAND: Dict[str, List[str]] = {
    "belongs_to__application": ["app_name"],
    "is_of__device_type": ["slug"],
    "is_running__release": ["commit"],
}

# Full-length uuids; anything shorter is matched as a prefix
FULL_UUID_LENGTHS = (32, 62)


def _expand_param(expand: Dict[str, List[str]]) -> str:
    return ",".join(
        f"{relation}($select={','.join(fields)})"
        for relation, fields in expand.items()
    )


def build_device_query(identifier: Union[int, str]) -> Tuple[str, Dict[str, str]]:
    """
    Build the request path and OData query for a device lookup.

    Args:
        identifier: Numeric device id, or full/short uuid

    Returns:
        (path, params) relative to the API base URL

    Examples:
        >>> build_device_query(12345)[0]
        '/v6/device(12345)'

        >>> build_device_query("7cf02a6")[1]["$filter"]
        "startswith(uuid,'7cf02a6')"
    """
    params = {
        "$select": ",".join(DEVICE_SELECT),
        "$expand": _expand_param(DEVICE_EXPAND),
    }

    if isinstance(identifier, int):
        return f"/{settings.API_VERSION}/device({identifier})", params

    # Quotes are doubled inside OData string literals
    literal = identifier.replace("'", "''")
    if len(identifier) in FULL_UUID_LENGTHS:
        params["$filter"] = f"uuid eq '{literal}'"
    else:
        params["$filter"] = f"startswith(uuid,'{literal}')"
    return f"/{settings.API_VERSION}/device", params


def get_dashboard_url(uuid: str) -> str:
    """Return the dashboard summary page for a device."""
    return f"{settings.DASHBOARD_URL}/devices/{uuid}/summary"


async def get_device(
    client: httpx.AsyncClient,
    identifier: Union[int, str]
) -> Device:
    """
    Fetch one device from the fleet API.

    Args:
        client: HTTP client bound to the API base URL
        identifier: Numeric device id, or full/short uuid

    Returns:
        The device with its application, device type and release expanded

    Raises:
        DeviceNotFoundError: If no device matches
        AmbiguousDeviceError: If a short uuid matches several devices
        AuthError: If the API rejects the credentials
        NetworkError: On transport failure or an unexpected response
    """
    path, params = build_device_query(identifier)
    logger.debug(f"GET {path} {params}")

    try:
        response = await client.get(path, params=params)
    except httpx.RequestError as e:
        logger.error(f"Request error fetching device {identifier}: {e}")
        raise NetworkError(f"Could not reach {settings.API_URL}: {e}") from e

    if response.status_code in (401, 403):
        logger.error(f"Unauthorized fetching device {identifier}: HTTP {response.status_code}")
        raise AuthError(f"Unauthorized (HTTP {response.status_code}), please log in again")

    if response.status_code == 404:
        logger.error(f"Device not found: {identifier} (HTTP 404)")
        raise DeviceNotFoundError(identifier)

    if response.status_code >= 400:
        logger.error(f"Failed to fetch device {identifier}: HTTP {response.status_code}")
        raise NetworkError(
            f"Request failed: HTTP {response.status_code} {response.text.strip()}"
        )

    try:
        devices = ODataResponse[Device].model_validate(response.json()).d
    except ValueError as e:  # bad JSON or pydantic ValidationError
        logger.error(f"Unexpected response body for device {identifier}: {e}")
        raise NetworkError(f"Unexpected response from {settings.API_URL}") from e

    if not devices:
        logger.error(f"Device not found: {identifier}")
        raise DeviceNotFoundError(identifier)
    if len(devices) > 1:
        raise AmbiguousDeviceError(identifier, len(devices))

    logger.info(f"Successfully fetched device: {devices[0].uuid}")
    return devices[0]
