"""
Device schemas.
Type-safe contracts for the device resource and its display form.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Expanded relations
# ============================================================================

class ApplicationRef(BaseModel):
    """Owning application (fleet), expanded with $select=app_name."""
    app_name: str


class DeviceTypeRef(BaseModel):
    """Device type, expanded with $select=slug."""
    slug: str


class ReleaseRef(BaseModel):
    """Currently running release, expanded with $select=commit."""
    commit: str


# ============================================================================
# Device (as returned by the API)
# ============================================================================

class Device(BaseModel):
    """Raw device record. Read-only once fetched."""
    model_config = ConfigDict(frozen=True)

    id: int
    uuid: str
    device_name: Optional[str] = None
    overall_status: Optional[str] = None
    is_online: Optional[bool] = None
    ip_address: Optional[str] = None
    mac_address: Optional[str] = None
    last_connectivity_event: Optional[str] = None
    supervisor_version: Optional[str] = None
    is_web_accessible: Optional[bool] = None
    note: Optional[str] = None
    os_version: Optional[str] = None
    memory_usage: Optional[int] = None  # MiB
    memory_total: Optional[int] = None  # MiB
    public_address: Optional[str] = None
    storage_block_device: Optional[str] = None
    storage_usage: Optional[int] = None  # MiB
    storage_total: Optional[int] = None  # MiB
    cpu_usage: Optional[int] = None
    cpu_temp: Optional[int] = None
    cpu_id: Optional[str] = None
    is_undervolted: Optional[bool] = None

    belongs_to__application: List[ApplicationRef] = Field(default_factory=list)
    is_of__device_type: List[DeviceTypeRef] = Field(..., min_length=1)
    is_running__release: List[ReleaseRef] = Field(default_factory=list)


# ============================================================================
# Device view (what `fleetctl device` prints)
# ============================================================================

class DeviceView(BaseModel):
    """Presentation record derived from a Device. None means "not shown"."""
    model_config = ConfigDict(frozen=True)

    device_name: Optional[str] = None
    id: int
    device_type: str
    status: Optional[str] = None
    is_online: Optional[bool] = None
    ip_address: Optional[str] = None
    public_address: Optional[str] = None
    mac_address: Optional[str] = None
    application_name: str  # "N/a" when the device has no application
    last_seen: Optional[str] = None
    uuid: str
    commit: str  # "N/a" when no release is running
    supervisor_version: Optional[str] = None
    is_web_accessible: Optional[bool] = None
    note: Optional[str] = None
    os_version: Optional[str] = None
    dashboard_url: str
    cpu_usage_percent: Optional[int] = None
    cpu_temp_c: Optional[int] = None
    cpu_id: Optional[str] = None
    memory_usage_mb: Optional[int] = None
    memory_total_mb: Optional[int] = None
    memory_usage_percent: Optional[int] = None
    storage_block_device: Optional[str] = None
    storage_usage_mb: Optional[int] = None
    storage_total_mb: Optional[int] = None
    storage_usage_percent: Optional[int] = None
    undervoltage_detected: Optional[bool] = None  # only ever True or None
