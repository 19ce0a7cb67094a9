"""RuuviTag RAWv2 (data format 5) decoding.

Manufacturer Specific Data, company ID 0x0499 stripped:
    Offset  Length  Description
    0       1       Data format (0x05)
    1-2     2       Temperature, int16, 0.005 degC
    3-4     2       Humidity, uint16, 0.0025 %RH
    5-6     2       Pressure, uint16, Pa offset by -50000
    7-8     2       Power info: battery mV - 1600 (11 bits), TX power (5 bits)
    9-23    15      Acceleration, movement counter, sequence, MAC (not decoded)
"""

import logging

from .beacons import RuuviTag
from .errors import BeaconError, UnrecognizedFormat
from .fields import FieldReader

logger = logging.getLogger(__name__)

RUUVI_COMPANY_ID = 0x0499

RAWV2_FORMAT = 0x05
RAWV2_PAYLOAD_SIZE = 24

TEMPERATURE_STEP = 0.005
HUMIDITY_STEP = 0.0025
PRESSURE_OFFSET_PA = 50000
BATTERY_OFFSET_MV = 1600
BATTERY_SHIFT = 5


def parse_ruuvi(data: bytes) -> RuuviTag:
    """Parse a RAWv2 payload, raising on malformed input.

    Raises:
        TruncatedPayload: If the payload is shorter than 24 bytes
        UnrecognizedFormat: If the data format byte is not 0x05
    """
    reader = FieldReader(data)
    reader.require(RAWV2_PAYLOAD_SIZE)
    if reader.uint8(0) != RAWV2_FORMAT:
        raise UnrecognizedFormat(f"unsupported Ruuvi data format 0x{reader.uint8(0):02X}")

    temperature = reader.int16(1) * TEMPERATURE_STEP
    humidity = reader.uint16(3) * HUMIDITY_STEP
    pressure = (reader.uint16(5) + PRESSURE_OFFSET_PA) / 100
    battery = (reader.uint16(7) >> BATTERY_SHIFT) + BATTERY_OFFSET_MV

    return RuuviTag(
        temperature_celsius=f"{temperature:.2f}",
        humidity_percent=f"{humidity:.2f}",
        pressure_hpa=f"{pressure:.2f}",
        battery_millivolts=battery,
    )


def decode_ruuvi(data: bytes) -> RuuviTag | None:
    """Decode a Ruuvi manufacturer payload.

    Returns:
        The decoded reading, or None if the payload is not valid RAWv2
    """
    try:
        return parse_ruuvi(data)
    except BeaconError as e:
        logger.debug(f"[DECODE] RuuviTag rejected: {e}")
        return None
