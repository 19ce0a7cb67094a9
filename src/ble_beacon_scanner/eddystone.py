"""
Eddystone service data decoding.

Frame layout: [FrameType (1B)][Frame body (variable)]

Supported frames:
    0x00 UID  [0x00][TxPower][Namespace (10B)][Instance (6B)]          >= 18 bytes
    0x10 URL  [0x10][TxPower][Scheme][Encoded URL...]                  >= 4 bytes
    0x20 TLM  [0x20][Version][Batt mV (2B)][Temp 8.8 (2B)]
              [PDU count (4B)][Uptime 0.1s (4B)]                       >= 14 bytes

Other frame types (EID and reserved values) are not decoded.
"""

import logging
from enum import IntEnum

from .beacons import EddystoneTLM, EddystoneUID, EddystoneURL
from .eddystone_url import decode_url
from .errors import BeaconError, UnrecognizedFormat
from .fields import FieldReader

logger = logging.getLogger(__name__)

EDDYSTONE_SERVICE_ID = 0xFEAA


class FrameType(IntEnum):
    """Eddystone frame types."""
    UID = 0x00
    URL = 0x10
    TLM = 0x20


UID_FRAME_SIZE = 18
URL_FRAME_SIZE = 4
TLM_FRAME_SIZE = 14

NAMESPACE_SIZE = 10
INSTANCE_SIZE = 6


def parse_frame_type(data: bytes) -> FrameType | None:
    """Extract the frame type from an Eddystone payload."""
    if not data:
        return None
    try:
        return FrameType(data[0])
    except ValueError:
        return None


def parse_uid(reader: FieldReader) -> EddystoneUID:
    reader.require(UID_FRAME_SIZE)
    return EddystoneUID(
        namespace=reader.slice(2, NAMESPACE_SIZE).hex().upper(),
        instance=reader.slice(12, INSTANCE_SIZE).hex().upper(),
    )


def parse_url(reader: FieldReader) -> EddystoneURL:
    reader.require(URL_FRAME_SIZE)
    return EddystoneURL(url=decode_url(reader.tail(2)))


def parse_tlm(reader: FieldReader) -> EddystoneTLM:
    """Parse an unencrypted TLM frame.

    Temperature is signed 8.8 fixed point: the integer part is a signed
    byte, the fraction an unsigned byte over 256. Uptime counts tenths of
    a second.
    """
    reader.require(TLM_FRAME_SIZE)
    temperature = reader.int8(4) + reader.uint8(5) / 256.0
    uptime = reader.uint32(10) / 10.0
    return EddystoneTLM(
        battery_millivolts=reader.uint16(2),
        temperature_celsius=f"{temperature:.2f}",
        advertising_packet_count=reader.uint32(6),
        uptime_seconds=f"{uptime:.1f}",
    )


_FRAME_PARSERS = {
    FrameType.UID: parse_uid,
    FrameType.URL: parse_url,
    FrameType.TLM: parse_tlm,
}


def parse_eddystone(data: bytes) -> EddystoneUID | EddystoneURL | EddystoneTLM:
    """Parse an Eddystone payload, raising on malformed input.

    Raises:
        TruncatedPayload: If the frame is shorter than its type requires
        UnrecognizedFormat: If the frame type is missing or unsupported
    """
    frame_type = parse_frame_type(data)
    if frame_type is None:
        first = f"0x{data[0]:02X}" if data else "none"
        raise UnrecognizedFormat(f"unsupported Eddystone frame type {first}")
    return _FRAME_PARSERS[frame_type](FieldReader(data))


def decode_eddystone(data: bytes) -> EddystoneUID | EddystoneURL | EddystoneTLM | None:
    """Decode an Eddystone service data payload.

    Returns:
        The decoded frame, or None for unsupported or malformed frames
    """
    try:
        return parse_eddystone(data)
    except BeaconError as e:
        logger.debug(f"[DECODE] Eddystone rejected: {e}")
        return None
