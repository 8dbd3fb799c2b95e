import asyncio
import logging

import httpx
import pytest

from fleetctl.clients import device_client
from fleetctl.core.config import settings
from fleetctl.core.exceptions import (
    AmbiguousDeviceError,
    AuthError,
    DeviceNotFoundError,
    FleetError,
    NetworkError,
)

FULL_UUID = "7cf02a687b74206f92cb455969cf8e98"


def _fetch(handler, identifier):
    async def go():
        async with httpx.AsyncClient(
            base_url="https://api.example.com",
            transport=httpx.MockTransport(handler),
        ) as client:
            return await device_client.get_device(client, identifier)

    return asyncio.run(go())


def test_query_selects_fields_and_expands_relations():
    path, params = device_client.build_device_query(12345)

    assert path == f"/{settings.API_VERSION}/device(12345)"
    assert "$filter" not in params
    assert params["$select"].split(",") == device_client.DEVICE_SELECT
    assert len(device_client.DEVICE_SELECT) == 22
    assert params["$expand"] == (
        "belongs_to__application($select=app_name),"
        "is_of__device_type($select=slug),"
        "is_running__release($select=commit)"
    )


def test_query_short_uuid_matches_prefix():
    path, params = device_client.build_device_query("7cf02a6")

    assert path == f"/{settings.API_VERSION}/device"
    assert params["$filter"] == "startswith(uuid,'7cf02a6')"


def test_query_full_uuid_matches_exactly():
    _, params = device_client.build_device_query(FULL_UUID)

    assert params["$filter"] == f"uuid eq '{FULL_UUID}'"


def test_query_escapes_quotes():
    _, params = device_client.build_device_query("a'b")

    assert params["$filter"] == "startswith(uuid,'a''b')"


def test_dashboard_url(monkeypatch):
    monkeypatch.setattr(settings, "DASHBOARD_URL", "https://dash.example.com")

    assert device_client.get_dashboard_url("abc") == "https://dash.example.com/devices/abc/summary"


def test_get_device_returns_record(raw_device, odata_handler):
    requests = []
    device = _fetch(odata_handler({"d": [raw_device]}, requests=requests), "7cf02a6")

    assert device.uuid == raw_device["uuid"]
    assert device.is_of__device_type[0].slug == "raspberrypi4-64"
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert requests[0].url.params["$filter"] == "startswith(uuid,'7cf02a6')"


def test_get_device_by_id_uses_numeric_path(raw_device, odata_handler):
    requests = []
    _fetch(odata_handler({"d": [raw_device]}, requests=requests), 12345)

    assert requests[0].url.path == f"/{settings.API_VERSION}/device(12345)"


def test_empty_result_is_not_found(odata_handler):
    with pytest.raises(DeviceNotFoundError) as exc_info:
        _fetch(odata_handler({"d": []}), "deadbee")

    assert isinstance(exc_info.value, LookupError)
    assert "deadbee" in str(exc_info.value)


def test_404_is_not_found(odata_handler):
    with pytest.raises(DeviceNotFoundError):
        _fetch(odata_handler("Not Found", status_code=404), 1)


def test_prefix_matching_several_devices_is_ambiguous(raw_device, odata_handler):
    other = {**raw_device, "id": 2, "uuid": "7cf02a6ffffffffffffffffffffffff0"}

    with pytest.raises(AmbiguousDeviceError) as exc_info:
        _fetch(odata_handler({"d": [raw_device, other]}), "7cf02a6")

    assert exc_info.value.count == 2


@pytest.mark.parametrize("status_code", [401, 403])
def test_unauthorized_is_auth_error(status_code, odata_handler):
    with pytest.raises(AuthError):
        _fetch(odata_handler("Unauthorized", status_code=status_code), "7cf02a6")


def test_server_error_is_network_error(odata_handler):
    with pytest.raises(NetworkError) as exc_info:
        _fetch(odata_handler("boom", status_code=500), "7cf02a6")

    assert "500" in str(exc_info.value)


def test_transport_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        _fetch(handler, "7cf02a6")


def test_malformed_body_is_network_error(odata_handler):
    with pytest.raises(NetworkError):
        _fetch(odata_handler("<html>not json</html>"), "7cf02a6")

    with pytest.raises(NetworkError):
        _fetch(odata_handler({"d": [{"id": "x"}]}), "7cf02a6")


def test_errors_share_base_class():
    for error in (AmbiguousDeviceError("x", 2), DeviceNotFoundError("x"),
                  AuthError("x"), NetworkError("x")):
        assert isinstance(error, FleetError)


@pytest.mark.parametrize("body,status_code", [({"d": []}, 200), ("Not Found", 404)])
def test_not_found_is_logged(body, status_code, odata_handler, caplog):
    with caplog.at_level(logging.ERROR, logger=device_client.__name__):
        with pytest.raises(DeviceNotFoundError):
            _fetch(odata_handler(body, status_code=status_code), "deadbee")

    assert any(
        record.levelno == logging.ERROR and "deadbee" in record.getMessage()
        for record in caplog.records
    )
