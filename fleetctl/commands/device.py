"""
`fleetctl device <uuid>`: show info about a single device.
"""

import logging
import math
import re
import sys
from typing import List, Optional, TextIO, Union

import httpx

from fleetctl.clients import device_client
from fleetctl.utils import table
from fleetctl.utils.messages import APP_TO_FLEET_OUTPUT_MSG, warnify
from fleet_schemas.device import Device, DeviceView

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/a"

DEVICE_FIELDS: List[str] = [
    "$device_name$",
    "id",
    "device_type",
    "status",
    "is_online",
    "ip_address",
    "public_address",
    "mac_address",
    "application_name",
    "last_seen",
    "uuid",
    "commit",
    "supervisor_version",
    "is_web_accessible",
    "note",
    "os_version",
    "dashboard_url",
    "cpu_usage_percent",
    "cpu_temp_c",
    "cpu_id",
    "memory_usage_mb",
    "memory_total_mb",
    "memory_usage_percent",
    "storage_block_device",
    "storage_usage_mb",
    "storage_total_mb",
    "storage_usage_percent",
    "undervoltage_detected",
]

_INTEGER_RE = re.compile(r"(0|[1-9][0-9]*)")


def try_as_integer(value: str) -> Union[int, str]:
    """
    Return value as an int if it is a plain decimal integer, else unchanged.

    Examples:
        >>> try_as_integer("12345")
        12345

        >>> try_as_integer("7cf02a6")
        '7cf02a6'
    """
    if _INTEGER_RE.fullmatch(value):
        return int(value)
    return value


def usage_percent(usage: Optional[int], total: Optional[int]) -> Optional[int]:
    """Usage as a whole percentage of total, halves rounded up. None if unknown."""
    if usage is None or total is None or total == 0:
        return None
    return math.floor(usage / total * 100 + 0.5)


def derive_view(device: Device, dashboard_url: str) -> DeviceView:
    """
    Build the presentation record for a fetched device.

    Memory and storage values from the API are already in MiB and are
    copied unchanged into the *_mb fields.
    """
    application = device.belongs_to__application
    release = device.is_running__release

    return DeviceView(
        device_name=device.device_name,
        id=device.id,
        device_type=device.is_of__device_type[0].slug,
        status=device.overall_status,
        is_online=device.is_online,
        ip_address=device.ip_address,
        public_address=device.public_address,
        mac_address=device.mac_address,
        application_name=application[0].app_name if application else NOT_AVAILABLE,
        last_seen=device.last_connectivity_event,
        uuid=device.uuid,
        commit=release[0].commit if release else NOT_AVAILABLE,
        supervisor_version=device.supervisor_version,
        is_web_accessible=device.is_web_accessible,
        note=device.note,
        os_version=device.os_version,
        dashboard_url=dashboard_url,
        cpu_usage_percent=device.cpu_usage,
        cpu_temp_c=device.cpu_temp,
        cpu_id=device.cpu_id,
        memory_usage_mb=device.memory_usage,
        memory_total_mb=device.memory_total,
        memory_usage_percent=usage_percent(device.memory_usage, device.memory_total),
        storage_block_device=device.storage_block_device,
        storage_usage_mb=device.storage_usage,
        storage_total_mb=device.storage_total,
        storage_usage_percent=usage_percent(device.storage_usage, device.storage_total),
        # The API reports False for devices that cannot detect undervoltage
        undervoltage_detected=True if device.is_undervolted else None,
    )


def use_app_word(v13: bool, v13_env: bool) -> bool:
    """True when output should still use the legacy "application" wording."""
    return not v13 and not v13_env


def device_fields(app_word: bool) -> List[str]:
    """Ordered table fields, with the application row labelled for the wording."""
    label = "application_name" if app_word else "application_name => FLEET"
    return [label if field == "application_name" else field for field in DEVICE_FIELDS]


async def run(
    client: httpx.AsyncClient,
    identifier: Union[int, str],
    *,
    v13: bool = False,
    v13_env: bool = False,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """
    Fetch a device and print it as a vertical table.

    Args:
        client: HTTP client bound to the API base URL
        identifier: Numeric device id, or full/short uuid
        v13: The --v13 option
        v13_env: Environment-level v13 switch (settings.V13)
        stdout: Stream for the table
        stderr: Stream for the wording notice

    Raises:
        FleetError subclasses from the device client, unchanged
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    device = await device_client.get_device(client, identifier)
    view = derive_view(device, device_client.get_dashboard_url(device.uuid))

    app_word = use_app_word(v13, v13_env)
    if app_word and stderr.isatty():
        print(warnify(APP_TO_FLEET_OUTPUT_MSG), file=stderr)

    logger.debug(f"Rendering device {view.uuid} (app wording: {app_word})")
    print(table.vertical(view, device_fields(app_word), color=stdout.isatty()), file=stdout)
