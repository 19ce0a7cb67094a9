"""Pytest configuration and fixtures."""

import pytest

from ble_beacon_scanner import IBeaconConfig, build_ibeacon_payload

EXAMPLE_UUID = "01020304-0506-0708-090A-0B0C0D0E0F10"


@pytest.fixture
def ibeacon_payload():
    """iBeacon payload with UUID 0x01..0x10, major 1, minor 2, TX power 0."""
    return build_ibeacon_payload(IBeaconConfig(uuid=EXAMPLE_UUID, major=1, minor=2, tx_power=0))


@pytest.fixture
def eddystone_url_payload():
    """Eddystone-URL frame for http://www.example.com/."""
    return bytes([0x10, 0x00, 0x00]) + b"example" + bytes([0x00])


@pytest.fixture
def eddystone_uid_payload():
    """Eddystone-UID frame with namespace 0x00..0x09 and instance 0xA0..0xA5."""
    return bytes([0x00, 0xEE]) + bytes(range(10)) + bytes(range(0xA0, 0xA6))


@pytest.fixture
def eddystone_tlm_payload():
    """Eddystone-TLM frame: 3000 mV, 21.50 C, 100 PDUs, 3600.0 s uptime."""
    return bytes([
        0x20, 0x00,
        0x0B, 0xB8,
        0x15, 0x80,
        0x00, 0x00, 0x00, 0x64,
        0x00, 0x00, 0x8C, 0xA0,
    ])


@pytest.fixture
def ruuvi_payload():
    """RAWv2 payload: 2.00 C, 50.00 %RH, 550.00 hPa, battery 2977 mV, padded to 24 bytes."""
    payload = bytes([0x05, 0x01, 0x90, 0x4E, 0x20, 0x13, 0x88, 0xAC, 0x36])
    return payload + bytes(24 - len(payload))
