"""Beacon scanner using bleak.

This module connects a BleakScanner to a ScanSession: every advertisement
bleak reports is converted to a RawAdvertisement, handled by the session,
and the resulting registry event is passed to a callback.

Requirements:
    - A Bluetooth adapter supported by bleak (BlueZ, CoreBluetooth or WinRT)
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Callable

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData

from .beacons import RawAdvertisement
from .registry import RegistryEvent
from .session import ScanSession

logger = logging.getLogger(__name__)

DEFAULT_ADAPTER = "hci0"

# 16-bit UUIDs expanded onto the Bluetooth base UUID
BASE_UUID_PATTERN = re.compile(r"^0000([0-9a-f]{4})-0000-1000-8000-00805f9b34fb$")
SHORT_UUID_PATTERN = re.compile(r"^(?:0x)?([0-9a-f]{4})$")


@dataclass
class ScannerConfig:
    """Scanner settings.

    Attributes:
        adapter: Bluetooth adapter name (BlueZ only, ignored elsewhere)
        duration: Seconds to scan before stopping, or None to run until cancelled
    """

    adapter: str = DEFAULT_ADAPTER
    duration: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.adapter:
            raise ScannerConfigError("Adapter name must not be empty")
        if self.duration is not None and self.duration <= 0:
            raise ScannerConfigError(f"Duration must be positive, got {self.duration}")


class ScannerConfigError(ValueError):
    """Raised when scanner configuration is invalid."""

    pass


def normalize_service_uuid(service_uuid: str | int) -> str | int:
    """Reduce a service UUID to a 16-bit int where possible.

    "0000feaa-0000-1000-8000-00805f9b34fb", "feaa" and "0xFEAA" all map to
    0xFEAA. Other 128-bit UUIDs are returned lowercased.
    """
    if isinstance(service_uuid, int):
        return service_uuid

    normalized = service_uuid.strip().lower()
    match = BASE_UUID_PATTERN.match(normalized) or SHORT_UUID_PATTERN.match(normalized)
    if match:
        return int(match.group(1), 16)
    return normalized


def raw_from_bleak(device: BLEDevice, advertisement_data: AdvertisementData) -> RawAdvertisement:
    """Convert a bleak detection callback pair into a RawAdvertisement."""
    return RawAdvertisement(
        device_id=device.address,
        rssi=advertisement_data.rssi,
        manufacturer_data={
            company_id: bytes(data)
            for company_id, data in advertisement_data.manufacturer_data.items()
        },
        service_data={
            normalize_service_uuid(uuid): bytes(data)
            for uuid, data in advertisement_data.service_data.items()
        },
    )


class BeaconScanner:
    """Feeds bleak advertisements into a ScanSession.

    The session is opened on start() and closed on stop(), so each scan
    starts with an empty registry.

    Example:
        session = ScanSession()
        scanner = BeaconScanner(session, on_event=print)
        await scanner.start()
        # ... advertisements are being handled ...
        await scanner.stop()
    """

    def __init__(
        self,
        session: ScanSession,
        on_event: Callable[[RegistryEvent], None],
        config: ScannerConfig | None = None,
    ):
        """Initialize the scanner.

        Args:
            session: Session receiving the advertisements
            on_event: Called with the registry event of every advertisement
            config: Scanner settings (defaults if None)
        """
        self._session = session
        self._on_event = on_event
        self._config = config or ScannerConfig()
        self._scanner: BleakScanner | None = None

    @property
    def is_scanning(self) -> bool:
        """Return whether the scanner is currently active."""
        return self._scanner is not None

    def detection_callback(self, device: BLEDevice, advertisement_data: AdvertisementData) -> None:
        """Handle one advertisement. Passed to BleakScanner."""
        if not self._session.is_open:
            # Late callback after stop()
            return
        event = self._session.handle(raw_from_bleak(device, advertisement_data))
        self._on_event(event)

    async def start(self) -> None:
        """Open the session and start scanning."""
        if self.is_scanning:
            logger.warning("[SCAN] Already scanning, ignoring start request")
            return

        logger.info(f"[SCAN] Starting scan on {self._config.adapter}...")
        self._session.open()
        scanner = BleakScanner(
            detection_callback=self.detection_callback,
            adapter=self._config.adapter,
        )
        try:
            await scanner.start()
        except Exception:
            self._session.close()
            raise

        self._scanner = scanner
        logger.info("[SCAN] Scan active, waiting for advertisements")

    async def stop(self) -> None:
        """Stop scanning and close the session."""
        if not self.is_scanning:
            logger.debug("[SCAN] Not scanning, nothing to stop")
            return

        logger.info("[SCAN] Stopping scan...")
        try:
            await self._scanner.stop()
        except Exception as e:
            logger.warning(f"[SCAN] Error stopping scanner: {e}")
        finally:
            self._scanner = None
            self._session.close()

        logger.info("[SCAN] Scan stopped")

    async def run_forever(self) -> None:
        """Scan until cancelled or until the configured duration elapses."""
        await self.start()

        try:
            if self._config.duration is None:
                await asyncio.Future()
            else:
                await asyncio.sleep(self._config.duration)
        except asyncio.CancelledError:
            logger.info("[SCAN] Received cancellation, shutting down...")
        finally:
            await self.stop()
