"""Decode and classification errors.

These never leave the decoding layer: the public decoder and classifier
functions catch them and return None instead.
"""


class BeaconError(ValueError):
    """Base class for advertisement payload errors."""

    pass


class TruncatedPayload(BeaconError):
    """Raised when a buffer is shorter than a field or format requires."""

    def __init__(self, required: int, available: int):
        super().__init__(f"need {required} bytes, got {available}")
        self.required = required
        self.available = available


class UnrecognizedFormat(BeaconError):
    """Raised when a magic or frame-type byte matches no supported variant."""

    pass


class UnclassifiablePacket(BeaconError):
    """Raised when no classification rule matches an advertisement."""

    pass
