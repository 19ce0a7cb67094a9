"""Tests for the device registry and scan session."""

import logging

import pytest

from ble_beacon_scanner import (
    BeaconType,
    Created,
    DeviceRegistry,
    EddystoneTLM,
    EddystoneUID,
    IBeacon,
    Ignored,
    RawAdvertisement,
    ScanSession,
    SessionClosedError,
    Updated,
)

UID = EddystoneUID(namespace="00010203040506070809", instance="A0A1A2A3A4A5")
TLM = EddystoneTLM(
    battery_millivolts=3000,
    temperature_celsius="21.50",
    advertising_packet_count=100,
    uptime_seconds="3600.0",
)


class TestDeviceRegistry:
    """Tests for create-once, update-RSSI-after semantics."""

    def test_none_is_ignored(self):
        registry = DeviceRegistry()
        assert registry.observe("dev-1", -70, None) == Ignored()
        assert len(registry) == 0

    def test_first_observation_creates(self):
        registry = DeviceRegistry()
        event = registry.observe("dev-1", -70, UID)

        assert isinstance(event, Created)
        assert event.beacon == UID
        assert event.record.beacon_type is BeaconType.EDDYSTONE_UID
        assert event.record.last_rssi == -70
        assert "dev-1" in registry

    def test_later_observations_only_update_rssi(self):
        registry = DeviceRegistry()
        registry.observe("dev-1", -70, UID)

        event = registry.observe("dev-1", -55, TLM)

        assert isinstance(event, Updated)
        assert event.record.beacon_type is BeaconType.EDDYSTONE_UID
        assert event.record.last_rssi == -55
        assert registry.get("dev-1") is event.record

    def test_size_counts_distinct_devices(self):
        registry = DeviceRegistry()
        for rssi in range(-80, -60):
            registry.observe("dev-1", rssi, UID)
            registry.observe("dev-2", rssi, TLM)
            registry.observe("dev-3", rssi, None)

        assert len(registry) == 2
        assert [record.device_id for record in registry.records()] == ["dev-1", "dev-2"]

    def test_ignored_does_not_touch_existing_record(self):
        registry = DeviceRegistry()
        registry.observe("dev-1", -70, UID)
        registry.observe("dev-1", -40, None)
        assert registry.get("dev-1").last_rssi == -70

    def test_clear(self):
        registry = DeviceRegistry()
        registry.observe("dev-1", -70, UID)
        registry.clear()

        assert len(registry) == 0
        assert isinstance(registry.observe("dev-1", -70, TLM), Created)

    def test_update_of_unknown_device_is_a_contract_breach(self):
        with pytest.raises(KeyError):
            DeviceRegistry()._update("missing", -70)


class TestScanSession:
    """Tests for the session entry point."""

    def test_handle_requires_open_session(self, ibeacon_payload):
        session = ScanSession()
        raw = RawAdvertisement("dev-1", -60, {0x004C: ibeacon_payload})
        with pytest.raises(SessionClosedError):
            session.handle(raw)

    def test_handle_creates_then_updates(self, ibeacon_payload, eddystone_url_payload):
        with ScanSession() as session:
            first = session.handle(RawAdvertisement("dev-1", -60, {0x004C: ibeacon_payload}))
            second = session.handle(
                RawAdvertisement("dev-1", -48, service_data={0xFEAA: eddystone_url_payload})
            )

            assert isinstance(first, Created)
            assert isinstance(first.beacon, IBeacon)
            assert isinstance(second, Updated)
            assert second.record.beacon_type is BeaconType.IBEACON
            assert second.record.last_rssi == -48
            assert len(session.registry) == 1

    def test_truncated_packet_leaves_registry_unchanged(self):
        with ScanSession() as session:
            event = session.handle(RawAdvertisement("dev-1", -60, {0x004C: bytes(5)}))
            assert event == Ignored()
            assert len(session.registry) == 0

    def test_close_clears_registry(self, ruuvi_payload):
        session = ScanSession()
        session.open()
        session.handle(RawAdvertisement("dev-1", -60, {0x0499: ruuvi_payload}))
        session.close()

        assert not session.is_open
        assert len(session.registry) == 0

    def test_clear_keeps_session_open(self, ruuvi_payload):
        with ScanSession() as session:
            session.handle(RawAdvertisement("dev-1", -60, {0x0499: ruuvi_payload}))
            session.clear()
            assert session.is_open
            assert isinstance(
                session.handle(RawAdvertisement("dev-1", -61, {0x0499: ruuvi_payload})), Created
            )

    def test_logs_new_beacon(self, caplog, eddystone_tlm_payload):
        with caplog.at_level(logging.INFO, logger="ble_beacon_scanner.session"):
            with ScanSession() as session:
                session.handle(
                    RawAdvertisement("AABBCCDDEEFF0011", -60, service_data={0xFEAA: eddystone_tlm_payload})
                )
        assert "New beacon [Eddystone-TLM] found: AABBCCDDEE..." in caplog.text

    def test_logs_unassigned_eddystone_frame(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="ble_beacon_scanner.session"):
            with ScanSession() as session:
                session.handle(RawAdvertisement("dev-1", -60, service_data={0xFEAA: bytes([0x30, 0x00])}))
        assert "could not be assigned" in caplog.text
