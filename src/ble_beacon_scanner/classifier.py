"""Advertisement classification policy.

Rules are evaluated in order and the first rule whose predicate matches
decides the outcome, even when its decoder then rejects the payload:

    1. Apple manufacturer data (0x004C) that decodes as iBeacon
    2. Eddystone service data (0xFEAA), any frame type
    3. Ruuvi manufacturer data (0x0499)
    4. Well-known GATT service in service data, by priority:
       Battery (0x180F) > Environmental Sensing (0x181A) > Heart Rate (0x180D)

Rule 1 includes the decode in its predicate, so other Apple payloads
(Find My, Continuity) fall through to the remaining rules.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .beacons import GattServiceAnnouncement, ParsedBeacon, RawAdvertisement
from .eddystone import EDDYSTONE_SERVICE_ID, decode_eddystone
from .errors import UnclassifiablePacket
from .ibeacon_packet import APPLE_COMPANY_ID, decode_ibeacon
from .ruuvi import RUUVI_COMPANY_ID, decode_ruuvi

logger = logging.getLogger(__name__)

# Highest priority first
GATT_SERVICES = (
    (0x180F, "Battery Service"),
    (0x181A, "Environmental Sensing"),
    (0x180D, "Heart Rate"),
)


@dataclass(frozen=True)
class ClassificationRule:
    """A (predicate, handler) pair.

    Attributes:
        name: Rule name used in diagnostics
        matches: Predicate deciding whether this rule owns the packet
        decode: Handler producing the beacon, or None if the payload is invalid
    """
    name: str
    matches: Callable[[RawAdvertisement], bool]
    decode: Callable[[RawAdvertisement], Optional[ParsedBeacon]]


def _is_ibeacon(raw: RawAdvertisement) -> bool:
    data = raw.manufacturer_data.get(APPLE_COMPANY_ID)
    return data is not None and decode_ibeacon(data) is not None


def _decode_ibeacon(raw: RawAdvertisement) -> Optional[ParsedBeacon]:
    return decode_ibeacon(raw.manufacturer_data[APPLE_COMPANY_ID])


def _decode_eddystone(raw: RawAdvertisement) -> Optional[ParsedBeacon]:
    return decode_eddystone(raw.service_data[EDDYSTONE_SERVICE_ID])


def _decode_ruuvi(raw: RawAdvertisement) -> Optional[ParsedBeacon]:
    return decode_ruuvi(raw.manufacturer_data[RUUVI_COMPANY_ID])


def _has_gatt_service(raw: RawAdvertisement) -> bool:
    return any(service_id in raw.service_data for service_id, _ in GATT_SERVICES)


def _announce_gatt_service(raw: RawAdvertisement) -> Optional[ParsedBeacon]:
    for service_id, label in GATT_SERVICES:
        if service_id in raw.service_data:
            return GattServiceAnnouncement(label=label, service_id=service_id)
    return None


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("ibeacon", _is_ibeacon, _decode_ibeacon),
    ClassificationRule(
        "eddystone",
        lambda raw: EDDYSTONE_SERVICE_ID in raw.service_data,
        _decode_eddystone,
    ),
    ClassificationRule(
        "ruuvi",
        lambda raw: RUUVI_COMPANY_ID in raw.manufacturer_data,
        _decode_ruuvi,
    ),
    ClassificationRule("gatt-service", _has_gatt_service, _announce_gatt_service),
)


class Classifier:
    """Routes a raw advertisement to the decoder selected by the rule list.

    Holds no state between packets.
    """

    def __init__(self, rules: Sequence[ClassificationRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def select_rule(self, raw: RawAdvertisement) -> ClassificationRule:
        """Return the first rule matching the packet.

        Raises:
            UnclassifiablePacket: If no rule matches
        """
        for rule in self.rules:
            if rule.matches(raw):
                return rule
        raise UnclassifiablePacket(
            f"no rule for manufacturer keys {sorted(raw.manufacturer_data)} "
            f"and service keys {sorted(map(str, raw.service_data))}"
        )

    def classify(self, raw: RawAdvertisement) -> Optional[ParsedBeacon]:
        """Classify and decode one advertisement.

        Returns:
            The decoded beacon, or None if the packet is discarded
        """
        try:
            rule = self.select_rule(raw)
        except UnclassifiablePacket as e:
            logger.debug(f"[CLASSIFY] {raw.device_id[:10]}... discarded: {e}")
            return None

        beacon = rule.decode(raw)
        if beacon is None:
            logger.debug(f"[CLASSIFY] {raw.device_id[:10]}... matched '{rule.name}' but did not decode")
        return beacon


def classify(raw: RawAdvertisement) -> Optional[ParsedBeacon]:
    """Classify one advertisement with the default rules."""
    return Classifier().classify(raw)
