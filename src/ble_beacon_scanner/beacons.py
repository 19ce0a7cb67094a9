"""Decoded beacon records and the raw advertisement input type.

ParsedBeacon is a closed union; every member carries a class-level
``beacon_type`` so callers can dispatch without isinstance chains.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Mapping, Union


class BeaconType(Enum):
    """Beacon variants recognized by the classifier."""
    IBEACON = "iBeacon"
    EDDYSTONE_UID = "Eddystone-UID"
    EDDYSTONE_URL = "Eddystone-URL"
    EDDYSTONE_TLM = "Eddystone-TLM"
    RUUVITAG = "RuuviTag"
    GATT_SERVICE = "GATT-Service"


@dataclass(frozen=True)
class RawAdvertisement:
    """One advertisement as delivered by the scanning layer.

    Attributes:
        device_id: Identifier that is stable for a device within a session
        rssi: Received signal strength in dBm
        manufacturer_data: Company ID -> payload (company ID prefix stripped)
        service_data: 16-bit service ID (int) or 128-bit UUID (str) -> payload
    """
    device_id: str
    rssi: int
    manufacturer_data: Mapping[int, bytes] = field(default_factory=dict)
    service_data: Mapping[Union[int, str], bytes] = field(default_factory=dict)


@dataclass(frozen=True)
class IBeacon:
    """
    Apple iBeacon.

    tx_power is the calibrated RSSI at 1m; it is decoded but not displayed.
    """
    beacon_type: ClassVar[BeaconType] = BeaconType.IBEACON

    uuid: str
    major: int
    minor: int
    tx_power: int = 0


@dataclass(frozen=True)
class EddystoneUID:
    beacon_type: ClassVar[BeaconType] = BeaconType.EDDYSTONE_UID

    namespace: str
    instance: str


@dataclass(frozen=True)
class EddystoneURL:
    beacon_type: ClassVar[BeaconType] = BeaconType.EDDYSTONE_URL

    url: str


@dataclass(frozen=True)
class EddystoneTLM:
    """
    Eddystone telemetry frame.

    Temperature (2 decimals) and uptime in seconds (1 decimal) are kept as
    formatted strings, matching how they are displayed.
    """
    beacon_type: ClassVar[BeaconType] = BeaconType.EDDYSTONE_TLM

    battery_millivolts: int
    temperature_celsius: str
    advertising_packet_count: int
    uptime_seconds: str


@dataclass(frozen=True)
class RuuviTag:
    """RuuviTag RAWv2 (data format 5) environmental reading."""
    beacon_type: ClassVar[BeaconType] = BeaconType.RUUVITAG

    temperature_celsius: str
    humidity_percent: str
    pressure_hpa: str
    battery_millivolts: int


@dataclass(frozen=True)
class GattServiceAnnouncement:
    """A device that only names a well-known GATT service in its service data."""
    beacon_type: ClassVar[BeaconType] = BeaconType.GATT_SERVICE

    label: str
    service_id: int


ParsedBeacon = Union[
    IBeacon,
    EddystoneUID,
    EddystoneURL,
    EddystoneTLM,
    RuuviTag,
    GattServiceAnnouncement,
]
