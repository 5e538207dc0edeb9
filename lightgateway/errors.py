"""Error hierarchy for the gateway."""

from __future__ import annotations


class Error(Exception):
    """Base class for all gateway errors."""


class CustomError(Error):
    """A rare error that carries only a message."""

    def __init__(self, message: str) -> None:
        self.message = str(message)
        super().__init__(self.message)


class DecodeError(Error):
    """Data could not be decoded."""


class InvalidEnvelopeError(DecodeError):
    def __init__(self) -> None:
        super().__init__("unexpected transaction in envelope")


class InvalidCrcError(DecodeError):
    def __init__(self) -> None:
        super().__init__("packet crc")


class KeypairUriError(DecodeError):
    """A keypair URI could not be used."""

    def __init__(self, message: str) -> None:
        self.message = str(message)
        super().__init__(f"keypair uri: {self.message}")


class ServiceError(Error):
    """A remote or local service failed."""


class StreamClosedError(ServiceError):
    def __init__(self) -> None:
        super().__init__("stream closed")


class ChannelClosedError(ServiceError):
    def __init__(self) -> None:
        super().__init__("channel closed")


class NoServiceError(ServiceError):
    def __init__(self) -> None:
        super().__init__("no service")


class ServiceCheckError(ServiceError):
    """A gateway service is lagging too far behind the chain."""

    def __init__(self, block_age: int, max_age: int) -> None:
        self.block_age = block_age
        self.max_age = max_age
        super().__init__(f"block age {block_age}s > {max_age}s")


class RegionError(Error):
    """Region parameters are missing or incomplete."""


class NoRegionParamsError(RegionError):
    def __init__(self) -> None:
        super().__init__("no region params found or active")


class NoRegionTxPowerError(RegionError):
    def __init__(self) -> None:
        super().__init__("no region tx power defined in region params")