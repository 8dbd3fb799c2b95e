import io
import json

import httpx
import pytest

from fleetctl.core.config import settings


class TTYStream(io.StringIO):
    """StringIO that claims to be a terminal."""

    def isatty(self):
        return True


@pytest.fixture
def raw_device():
    """A device as returned by the API with every relation expanded."""
    return {
        "id": 12345,
        "uuid": "7cf02a687b74206f92cb455969cf8e98",
        "device_name": "billowing-sun",
        "overall_status": "idle",
        "is_online": True,
        "ip_address": "192.168.1.42",
        "mac_address": "dc:a6:32:00:11:22",
        "last_connectivity_event": "2024-05-01T10:20:30.000Z",
        "supervisor_version": "14.11.0",
        "is_web_accessible": False,
        "note": None,
        "os_version": "balenaOS 5.1.20",
        "memory_usage": 450,
        "memory_total": 900,
        "public_address": "203.0.113.7",
        "storage_block_device": "/dev/mmcblk0p6",
        "storage_usage": 1000,
        "storage_total": 3000,
        "cpu_usage": 12,
        "cpu_temp": 51,
        "cpu_id": "10000000d3a2b1c0",
        "is_undervolted": False,
        "belongs_to__application": [{"app_name": "weather-station"}],
        "is_of__device_type": [{"slug": "raspberrypi4-64"}],
        "is_running__release": [{"commit": "a1b2c3d4e5f6"}],
    }


@pytest.fixture
def tty():
    """Factory for fake terminal streams."""
    return TTYStream


@pytest.fixture
def api_token(monkeypatch):
    monkeypatch.setattr(settings, "API_TOKEN", "test-token")
    monkeypatch.setattr(settings, "V13", False)
    return "test-token"


@pytest.fixture
def odata_handler():
    """Build a MockTransport handler answering every request with the given body."""

    def factory(body=None, status_code=200, requests=None):
        def handler(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)
            if isinstance(body, (dict, list)):
                return httpx.Response(status_code, content=json.dumps(body))
            return httpx.Response(status_code, text=body or "")

        return handler

    return factory
