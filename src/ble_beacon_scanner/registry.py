"""
Device deduplication registry.

A device is recorded the first time one of its advertisements classifies.
After that, every classified advertisement only refreshes its RSSI:

    unknown --(beacon)--> Created --(beacon)--> Updated --(beacon)--> Updated ...

The beacon type recorded at creation never changes, even if the device
later sends a different frame (e.g. an Eddystone beacon alternating UID and
TLM frames keeps whichever arrived first).
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .beacons import BeaconType, ParsedBeacon

logger = logging.getLogger(__name__)


@dataclass
class DeviceRecord:
    """First-seen record for one device. Only last_rssi changes."""
    device_id: str
    beacon_type: BeaconType
    last_rssi: int


@dataclass(frozen=True)
class Created:
    """A device was seen for the first time."""
    record: DeviceRecord
    beacon: ParsedBeacon


@dataclass(frozen=True)
class Updated:
    """A known device was seen again; only its RSSI was refreshed."""
    record: DeviceRecord


@dataclass(frozen=True)
class Ignored:
    """The advertisement did not classify; nothing changed."""
    pass


RegistryEvent = Union[Created, Updated, Ignored]


class DeviceRegistry:
    """
    Maps device identifiers to their first-classified record.

    Not thread-safe; owned by a single scan session.
    """

    def __init__(self):
        self._records: dict[str, DeviceRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._records

    def get(self, device_id: str) -> Optional[DeviceRecord]:
        """Get a record by device ID."""
        return self._records.get(device_id)

    def records(self) -> Iterator[DeviceRecord]:
        """Iterate over records in first-seen order."""
        return iter(list(self._records.values()))

    def observe(self, device_id: str, rssi: int, beacon: Optional[ParsedBeacon]) -> RegistryEvent:
        """
        Record one classification result.

        Args:
            device_id: Device identifier from the scanner
            rssi: Signal strength of this advertisement in dBm
            beacon: Decoded beacon, or None if the packet did not classify

        Returns:
            Created for a new device, Updated for a known one, Ignored if
            beacon is None
        """
        if beacon is None:
            return Ignored()

        if device_id in self._records:
            return Updated(self._update(device_id, rssi))

        record = DeviceRecord(device_id=device_id, beacon_type=beacon.beacon_type, last_rssi=rssi)
        self._records[device_id] = record
        logger.debug(f"[REGISTRY] Added {device_id} as {beacon.beacon_type.value} ({len(self._records)} devices)")
        return Created(record, beacon)

    def _update(self, device_id: str, rssi: int) -> DeviceRecord:
        # KeyError here means a caller skipped the existence check
        record = self._records[device_id]
        record.last_rssi = rssi
        return record

    def clear(self) -> None:
        """Remove all records."""
        self._records.clear()
        logger.debug("[REGISTRY] Cleared")
