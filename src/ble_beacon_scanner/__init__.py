"""BLE beacon advertisement decoding and deduplication.

This package classifies broadcast BLE advertisements, decodes iBeacon,
Eddystone (UID/URL/TLM) and RuuviTag RAWv2 payloads, and keeps one
first-seen record per device with live RSSI updates.

Example:
    from ble_beacon_scanner import RawAdvertisement, ScanSession, Created

    with ScanSession() as session:
        event = session.handle(
            RawAdvertisement(device_id="AA:BB:CC:DD:EE:FF", rssi=-60,
                             manufacturer_data={0x004C: payload})
        )
        if isinstance(event, Created):
            print(event.beacon)
"""

__version__ = "0.1.0"

from .beacons import (
    BeaconType,
    RawAdvertisement,
    ParsedBeacon,
    IBeacon,
    EddystoneUID,
    EddystoneURL,
    EddystoneTLM,
    RuuviTag,
    GattServiceAnnouncement,
)
from .errors import (
    BeaconError,
    TruncatedPayload,
    UnrecognizedFormat,
    UnclassifiablePacket,
)
from .fields import FieldReader
from .eddystone_url import decode_url, encode_url, split_url
from .ibeacon_packet import (
    IBeaconConfig,
    IBeaconConfigError,
    build_ibeacon_payload,
    build_manufacturer_data,
    decode_ibeacon,
    APPLE_COMPANY_ID,
)
from .eddystone import decode_eddystone, EDDYSTONE_SERVICE_ID
from .ruuvi import decode_ruuvi, RUUVI_COMPANY_ID
from .classifier import (
    Classifier,
    ClassificationRule,
    DEFAULT_RULES,
    GATT_SERVICES,
    classify,
)
from .registry import (
    DeviceRecord,
    DeviceRegistry,
    RegistryEvent,
    Created,
    Updated,
    Ignored,
)
from .session import ScanSession, SessionClosedError
from .render import format_beacon, format_event

__all__ = [
    # Version
    "__version__",
    # Beacons
    "BeaconType",
    "RawAdvertisement",
    "ParsedBeacon",
    "IBeacon",
    "EddystoneUID",
    "EddystoneURL",
    "EddystoneTLM",
    "RuuviTag",
    "GattServiceAnnouncement",
    # Errors
    "BeaconError",
    "TruncatedPayload",
    "UnrecognizedFormat",
    "UnclassifiablePacket",
    # Decoding
    "FieldReader",
    "decode_url",
    "encode_url",
    "split_url",
    "IBeaconConfig",
    "IBeaconConfigError",
    "build_ibeacon_payload",
    "build_manufacturer_data",
    "decode_ibeacon",
    "decode_eddystone",
    "decode_ruuvi",
    # Classification
    "Classifier",
    "ClassificationRule",
    "DEFAULT_RULES",
    "classify",
    # Registry and session
    "DeviceRecord",
    "DeviceRegistry",
    "RegistryEvent",
    "Created",
    "Updated",
    "Ignored",
    "ScanSession",
    "SessionClosedError",
    # Rendering
    "format_beacon",
    "format_event",
    # Constants
    "APPLE_COMPANY_ID",
    "EDDYSTONE_SERVICE_ID",
    "RUUVI_COMPANY_ID",
    "GATT_SERVICES",
]
