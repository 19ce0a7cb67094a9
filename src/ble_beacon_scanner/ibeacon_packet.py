"""iBeacon packet decoding and construction.

Pure Python, no platform dependencies.

iBeacon Packet Format (Manufacturer Specific Data, company ID stripped):
    Offset  Length  Value       Description
    0       1       0x02        iBeacon type
    1       1       0x15        Length (21 bytes following)
    2-17    16      [UUID]      Proximity UUID (big-endian)
    18-19   2       [Major]     Major value (big-endian)
    20-21   2       [Minor]     Minor value (big-endian)
    22      1       [TxPower]   Calibrated TX Power (signed int8)
"""

from dataclasses import dataclass
import logging
import re
import struct

from .beacons import IBeacon
from .errors import BeaconError, UnrecognizedFormat
from .fields import FieldReader

logger = logging.getLogger(__name__)

# Apple's company identifier for iBeacon
APPLE_COMPANY_ID = 0x004C

# iBeacon type and length constants
IBEACON_TYPE = 0x02
IBEACON_DATA_LENGTH = 0x15  # 21 bytes
IBEACON_PAYLOAD_SIZE = 23

DEFAULT_TX_POWER = -59  # Typical calibrated TX power at 1 meter

# UUID regex pattern (with or without hyphens)
UUID_PATTERN = re.compile(
    r"^[0-9A-Fa-f]{8}-?[0-9A-Fa-f]{4}-?[0-9A-Fa-f]{4}-?[0-9A-Fa-f]{4}-?[0-9A-Fa-f]{12}$"
)


@dataclass
class IBeaconConfig:
    """Field values for building an iBeacon payload.

    Attributes:
        uuid: 16-byte proximity UUID as string (e.g., "A1B2C3D4-E5F6-7890-ABCD-EF1234567890")
        major: Group identifier (0-65535)
        minor: Device identifier within group (0-65535)
        tx_power: Calibrated TX power at 1 meter in dBm (typically -59 to -65)
    """

    uuid: str
    major: int = 0
    minor: int = 0
    tx_power: int = DEFAULT_TX_POWER

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        validate_config(self)


class IBeaconConfigError(ValueError):
    """Raised when iBeacon configuration is invalid."""

    pass


def uuid_to_bytes(uuid_str: str) -> bytes:
    """Convert a UUID string to 16 bytes.

    Args:
        uuid_str: UUID string with or without hyphens

    Returns:
        16-byte representation of the UUID (big-endian)

    Raises:
        IBeaconConfigError: If UUID format is invalid
    """
    hex_str = uuid_str.replace("-", "")

    if len(hex_str) != 32:
        raise IBeaconConfigError(f"UUID must be 32 hex characters, got {len(hex_str)}")

    try:
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise IBeaconConfigError(f"Invalid UUID hex characters: {e}") from e


def bytes_to_uuid(raw: bytes) -> str:
    """Format 16 bytes as an uppercase 8-4-4-4-12 UUID string."""
    h = raw.hex().upper()
    return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"


def validate_config(config: IBeaconConfig) -> None:
    """Validate iBeacon configuration values.

    Raises:
        IBeaconConfigError: If any configuration value is invalid
    """
    if not UUID_PATTERN.match(config.uuid):
        raise IBeaconConfigError(
            f"Invalid UUID format: {config.uuid}. "
            "Expected format: XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX"
        )

    if not 0 <= config.major <= 65535:
        raise IBeaconConfigError(f"Major must be 0-65535, got {config.major}")

    if not 0 <= config.minor <= 65535:
        raise IBeaconConfigError(f"Minor must be 0-65535, got {config.minor}")

    if not -128 <= config.tx_power <= 127:
        raise IBeaconConfigError(f"TX power must be -128 to 127, got {config.tx_power}")


def build_ibeacon_payload(config: IBeaconConfig) -> bytes:
    """Build the 23-byte iBeacon payload (without Apple company ID prefix).

    Args:
        config: iBeacon field values

    Returns:
        23-byte iBeacon payload
    """
    # >: big-endian
    # B: iBeacon type
    # B: data length
    # 16s: proximity UUID
    # H: major
    # H: minor
    # b: tx_power (signed)
    return struct.pack(
        ">BB16sHHb",
        IBEACON_TYPE,
        IBEACON_DATA_LENGTH,
        uuid_to_bytes(config.uuid),
        config.major,
        config.minor,
        config.tx_power,
    )


def build_manufacturer_data(config: IBeaconConfig) -> dict[int, bytes]:
    """Build a manufacturer data mapping as delivered by a scanner.

    Returns:
        Dictionary with Apple company ID as key and iBeacon payload as value
    """
    return {APPLE_COMPANY_ID: build_ibeacon_payload(config)}


def parse_ibeacon(data: bytes) -> IBeacon:
    """Parse an iBeacon payload, raising on malformed input.

    Raises:
        TruncatedPayload: If the payload is shorter than 23 bytes
        UnrecognizedFormat: If the type/length prefix is not 0x02 0x15
    """
    reader = FieldReader(data)
    reader.require(IBEACON_PAYLOAD_SIZE)

    if reader.uint8(0) != IBEACON_TYPE or reader.uint8(1) != IBEACON_DATA_LENGTH:
        raise UnrecognizedFormat(
            f"not an iBeacon prefix: {reader.uint8(0):02X}{reader.uint8(1):02X}"
        )

    return IBeacon(
        uuid=bytes_to_uuid(reader.slice(2, 16)),
        major=reader.uint16(18),
        minor=reader.uint16(20),
        tx_power=reader.int8(22),
    )


def decode_ibeacon(data: bytes) -> IBeacon | None:
    """Decode an Apple manufacturer payload as iBeacon.

    Returns:
        The decoded IBeacon, or None if the payload is not a valid iBeacon
    """
    try:
        return parse_ibeacon(data)
    except BeaconError as e:
        logger.debug(f"[DECODE] iBeacon rejected: {e}")
        return None
