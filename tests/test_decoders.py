"""Tests for the iBeacon, Eddystone and RuuviTag decoders."""

import pytest

from ble_beacon_scanner import (
    EddystoneTLM,
    EddystoneUID,
    EddystoneURL,
    IBeacon,
    IBeaconConfig,
    IBeaconConfigError,
    RuuviTag,
    TruncatedPayload,
    UnrecognizedFormat,
    build_ibeacon_payload,
    build_manufacturer_data,
    decode_eddystone,
    decode_ibeacon,
    decode_ruuvi,
)
from ble_beacon_scanner.eddystone import parse_eddystone
from ble_beacon_scanner.ibeacon_packet import parse_ibeacon
from ble_beacon_scanner.ruuvi import parse_ruuvi


class TestIBeacon:
    """Tests for iBeacon decoding and payload construction."""

    def test_example_payload(self, ibeacon_payload):
        assert ibeacon_payload == (
            bytes([0x02, 0x15]) + bytes(range(1, 17)) + bytes([0x00, 0x01, 0x00, 0x02, 0x00])
        )
        assert decode_ibeacon(ibeacon_payload) == IBeacon(
            uuid="01020304-0506-0708-090A-0B0C0D0E0F10", major=1, minor=2, tx_power=0
        )

    @pytest.mark.parametrize(
        ("uuid", "major", "minor", "tx_power"),
        [
            ("e7b2c021-5d07-4d0b-9c20-223488c8b012", 65535, 0, -59),
            ("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF", 0, 65535, 127),
            ("00000000-0000-0000-0000-000000000000", 258, 772, -128),
        ],
    )
    def test_decodes_built_payload(self, uuid, major, minor, tx_power):
        payload = build_ibeacon_payload(
            IBeaconConfig(uuid=uuid, major=major, minor=minor, tx_power=tx_power)
        )
        beacon = decode_ibeacon(payload)

        hex_str = uuid.replace("-", "").upper()
        assert beacon.uuid == "-".join(
            [hex_str[0:8], hex_str[8:12], hex_str[12:16], hex_str[16:20], hex_str[20:]]
        )
        assert (beacon.major, beacon.minor, beacon.tx_power) == (major, minor, tx_power)

    def test_trailing_bytes_are_ignored(self, ibeacon_payload):
        assert decode_ibeacon(ibeacon_payload + b"\xAA\xBB").minor == 2

    @pytest.mark.parametrize("length", [0, 1, 2, 5, 22])
    def test_truncated_payload(self, ibeacon_payload, length):
        assert decode_ibeacon(ibeacon_payload[:length]) is None
        with pytest.raises(TruncatedPayload):
            parse_ibeacon(ibeacon_payload[:length])

    def test_wrong_prefix(self, ibeacon_payload):
        find_my = bytes([0x12, 0x19]) + ibeacon_payload[2:]
        assert decode_ibeacon(find_my) is None
        with pytest.raises(UnrecognizedFormat):
            parse_ibeacon(find_my)

    def test_manufacturer_data_is_keyed_by_apple(self):
        data = build_manufacturer_data(IBeaconConfig(uuid="01020304-0506-0708-090A-0B0C0D0E0F10"))
        assert list(data) == [0x004C]
        assert len(data[0x004C]) == 23

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"uuid": "not-a-uuid"},
            {"uuid": "01020304-0506-0708-090A-0B0C0D0E0F10", "major": 65536},
            {"uuid": "01020304-0506-0708-090A-0B0C0D0E0F10", "minor": -1},
            {"uuid": "01020304-0506-0708-090A-0B0C0D0E0F10", "tx_power": 128},
        ],
    )
    def test_invalid_config(self, kwargs):
        with pytest.raises(IBeaconConfigError):
            IBeaconConfig(**kwargs)


class TestEddystone:
    """Tests for Eddystone frame dispatch."""

    def test_url_frame(self, eddystone_url_payload):
        assert decode_eddystone(eddystone_url_payload) == EddystoneURL(url="http://www.example.com/")

    def test_uid_frame(self, eddystone_uid_payload):
        assert decode_eddystone(eddystone_uid_payload) == EddystoneUID(
            namespace="00010203040506070809", instance="A0A1A2A3A4A5"
        )

    def test_tlm_frame(self, eddystone_tlm_payload):
        assert decode_eddystone(eddystone_tlm_payload) == EddystoneTLM(
            battery_millivolts=3000,
            temperature_celsius="21.50",
            advertising_packet_count=100,
            uptime_seconds="3600.0",
        )

    def test_tlm_negative_temperature(self, eddystone_tlm_payload):
        payload = bytearray(eddystone_tlm_payload)
        payload[4:6] = bytes([0xFF, 0x80])
        assert decode_eddystone(bytes(payload)).temperature_celsius == "-0.50"

    @pytest.mark.parametrize(
        ("fixture", "minimum"),
        [
            ("eddystone_uid_payload", 18),
            ("eddystone_url_payload", 4),
            ("eddystone_tlm_payload", 14),
        ],
    )
    def test_truncated_frames(self, request, fixture, minimum):
        payload = request.getfixturevalue(fixture)
        assert decode_eddystone(payload[:minimum]) is not None
        assert decode_eddystone(payload[:minimum - 1]) is None
        with pytest.raises(TruncatedPayload):
            parse_eddystone(payload[:minimum - 1])

    def test_short_url_frame_has_scheme_only(self):
        assert decode_eddystone(bytes([0x10, 0x00, 0x03, 0x00])) == EddystoneURL(url="https://.com/")

    @pytest.mark.parametrize("payload", [b"", bytes([0x30]) + bytes(17), bytes([0x40]) + bytes(20)])
    def test_unsupported_frames(self, payload):
        assert decode_eddystone(payload) is None
        with pytest.raises(UnrecognizedFormat):
            parse_eddystone(payload)


class TestRuuviTag:
    """Tests for RAWv2 decoding."""

    def test_example_payload(self, ruuvi_payload):
        assert decode_ruuvi(ruuvi_payload) == RuuviTag(
            temperature_celsius="2.00",
            humidity_percent="50.00",
            pressure_hpa="550.00",
            battery_millivolts=2977,
        )

    def test_published_test_vector(self):
        payload = bytes.fromhex("0512FC5394C37C0004FFFC040CAC364200CDCBB8334C884F")
        beacon = decode_ruuvi(payload)
        assert beacon.temperature_celsius == "24.30"
        assert beacon.humidity_percent == "53.49"
        assert beacon.pressure_hpa == "1000.44"

    def test_negative_temperature(self, ruuvi_payload):
        payload = bytearray(ruuvi_payload)
        payload[1:3] = bytes([0xFC, 0x18])
        assert decode_ruuvi(bytes(payload)).temperature_celsius == "-5.00"

    def test_battery_ignores_power_bits(self, ruuvi_payload):
        payload = bytearray(ruuvi_payload)
        payload[7:9] = bytes([0x00, 0x1F])
        assert decode_ruuvi(bytes(payload)).battery_millivolts == 1600
        payload[7:9] = bytes([0xFF, 0xE0])
        assert decode_ruuvi(bytes(payload)).battery_millivolts == 1600 + 2047

    def test_truncated_payload(self, ruuvi_payload):
        assert decode_ruuvi(ruuvi_payload[:23]) is None
        with pytest.raises(TruncatedPayload):
            parse_ruuvi(ruuvi_payload[:23])

    def test_other_data_format(self, ruuvi_payload):
        payload = bytes([0x03]) + ruuvi_payload[1:]
        assert decode_ruuvi(payload) is None
        with pytest.raises(UnrecognizedFormat):
            parse_ruuvi(payload)
