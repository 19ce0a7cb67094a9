"""Text summaries of decoded beacons and registry events."""

from .beacons import (
    EddystoneTLM,
    EddystoneUID,
    EddystoneURL,
    GattServiceAnnouncement,
    IBeacon,
    ParsedBeacon,
    RuuviTag,
)
from .registry import Created, RegistryEvent, Updated


def format_beacon(beacon: ParsedBeacon) -> str:
    """Format a decoded beacon as indented 'Field: value' lines.

    Raises:
        TypeError: If beacon is not one of the ParsedBeacon types
    """
    if isinstance(beacon, IBeacon):
        return (
            f"  UUID: {beacon.uuid}\n"
            f"  Major: {beacon.major}\n"
            f"  Minor: {beacon.minor}"
        )
    elif isinstance(beacon, EddystoneURL):
        return f"  URL: {beacon.url}"
    elif isinstance(beacon, EddystoneUID):
        return (
            f"  Namespace: {beacon.namespace}\n"
            f"  Instance: {beacon.instance}"
        )
    elif isinstance(beacon, EddystoneTLM):
        return (
            f"  Battery: {beacon.battery_millivolts} mV\n"
            f"  Temperature: {beacon.temperature_celsius} °C\n"
            f"  Packets: {beacon.advertising_packet_count}\n"
            f"  Uptime: {beacon.uptime_seconds} s"
        )
    elif isinstance(beacon, RuuviTag):
        return (
            f"  Temperature: {beacon.temperature_celsius} °C\n"
            f"  Humidity: {beacon.humidity_percent} %RH\n"
            f"  Pressure: {beacon.pressure_hpa} hPa\n"
            f"  Battery: {beacon.battery_millivolts} mV"
        )
    elif isinstance(beacon, GattServiceAnnouncement):
        return f"  Service: {beacon.label} (0x{beacon.service_id:04X})"
    raise TypeError(f"Unknown beacon type: {type(beacon).__name__}")


def format_event(event: RegistryEvent) -> str | None:
    """Format a registry event for display.

    Returns:
        A header line plus beacon summary for Created, a single RSSI line
        for Updated, and None for Ignored
    """
    if isinstance(event, Created):
        record = event.record
        header = f"{record.beacon_type.value} {record.device_id[:10]}... RSSI: {record.last_rssi} dBm"
        return f"{header}\n{format_beacon(event.beacon)}"
    if isinstance(event, Updated):
        record = event.record
        return f"{record.device_id[:10]}... RSSI: {record.last_rssi} dBm"
    return None
