"""
Scan session context.

Owns the device registry and classifier for one scanning session and
exposes a single synchronous entry point for advertisements:

    session = ScanSession()
    session.open()
    event = session.handle(raw_advertisement)
    ...
    session.close()

Advertisements must be handed over in delivery order; handle() finishes
before returning and never suspends.
"""

import logging
from typing import Optional

from .beacons import RawAdvertisement
from .classifier import Classifier
from .eddystone import EDDYSTONE_SERVICE_ID
from .registry import Created, DeviceRegistry, RegistryEvent, Updated

logger = logging.getLogger(__name__)


class SessionClosedError(RuntimeError):
    """Raised when an advertisement is handled outside an open session."""

    pass


class ScanSession:
    """Classification and deduplication state for one scanning session."""

    def __init__(
        self,
        classifier: Optional[Classifier] = None,
        registry: Optional[DeviceRegistry] = None,
    ):
        """Initialize the session.

        Args:
            classifier: Classifier to use (default rule order if None)
            registry: Registry to fill (a new empty one if None)
        """
        self.classifier = classifier or Classifier()
        self.registry = registry if registry is not None else DeviceRegistry()
        self._is_open = False

    @property
    def is_open(self) -> bool:
        """Return whether the session accepts advertisements."""
        return self._is_open

    def open(self) -> None:
        """Start accepting advertisements."""
        if self._is_open:
            logger.warning("[SESSION] Already open, ignoring open request")
            return
        self._is_open = True
        logger.info("[SESSION] Opened")

    def clear(self) -> None:
        """Forget all devices seen so far."""
        self.registry.clear()

    def close(self) -> None:
        """Stop accepting advertisements and forget all devices."""
        if not self._is_open:
            logger.debug("[SESSION] Not open, nothing to close")
            return
        count = len(self.registry)
        self.clear()
        self._is_open = False
        logger.info(f"[SESSION] Closed after {count} device(s)")

    def handle(self, raw: RawAdvertisement) -> RegistryEvent:
        """
        Classify one advertisement and record it.

        Returns:
            The registry event for this advertisement

        Raises:
            SessionClosedError: If the session is not open
        """
        if not self._is_open:
            raise SessionClosedError("ScanSession.handle() called on a closed session")

        beacon = self.classifier.classify(raw)
        event = self.registry.observe(raw.device_id, raw.rssi, beacon)

        short_id = raw.device_id[:10]
        if isinstance(event, Created):
            logger.info(f"[SESSION] New beacon [{event.record.beacon_type.value}] found: {short_id}...")
        elif isinstance(event, Updated):
            logger.debug(f"[SESSION] {short_id}... RSSI {event.record.last_rssi} dBm")
        elif EDDYSTONE_SERVICE_ID in raw.service_data and raw.device_id not in self.registry:
            logger.debug(f"[SESSION] Eddystone frame could not be assigned to a device (ID: {short_id}...)")

        return event

    def __enter__(self) -> "ScanSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
