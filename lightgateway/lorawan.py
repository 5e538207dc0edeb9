"""LoRaWAN PHY payload encoding and decoding."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import BinaryIO, Optional, Union

JOIN_REQUEST_LEN = 23
JOIN_ACCEPT_LEN = 17
JOIN_ACCEPT_WITH_CFLIST_LEN = 33
DATA_MIN_LEN = 12
MIC_LEN = 4


class LoraWanError(Exception):
    """Base error for LoRaWAN frame handling."""


class InvalidPacketTypeError(LoraWanError):
    """The frame's message type is not a usable one."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Invalid packet type: {value:#02x}")


class InvalidFPortForFoptsError(LoraWanError):
    """FPort 0 was given together with frame options."""

    def __init__(self) -> None:
        super().__init__("Invalid: fport 0 with fopts")


class InvalidPacketSizeError(LoraWanError):
    """The frame length does not fit its message type."""

    def __init__(self, mtype: "MType", size: int) -> None:
        self.mtype = mtype
        self.size = size
        super().__init__(f"Invalid packet size {size} for type {mtype.name}")


class Direction(Enum):
    UPLINK = "uplink"
    DOWNLINK = "downlink"


class MType(IntEnum):
    JOIN_REQUEST = 0b000
    JOIN_ACCEPT = 0b001
    UNCONFIRMED_UP = 0b010
    UNCONFIRMED_DOWN = 0b011
    CONFIRMED_UP = 0b100
    CONFIRMED_DOWN = 0b101
    INVALID = 0b110
    PROPRIETARY = 0b111

    @property
    def is_data(self) -> bool:
        return self in _DATA_TYPES


_DATA_TYPES = frozenset(
    {MType.UNCONFIRMED_UP, MType.UNCONFIRMED_DOWN, MType.CONFIRMED_UP, MType.CONFIRMED_DOWN}
)


def mtype_from_bits(value: int) -> MType:
    """Map the three message-type bits of an MHDR to an MType."""
    if not 0 <= value <= 0b111:
        raise ValueError(f"message type bits out of range: {value}")
    return MType(value)


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    data = reader.read(size)
    if len(data) != size:
        raise LoraWanError(f"unexpected end of data: wanted {size} bytes, got {len(data)}")
    return data


def _read_u8(reader: BinaryIO) -> int:
    return _read_exact(reader, 1)[0]


@dataclass(frozen=True)
class MHDR:
    """MAC header byte: message type in bits 7..5, major version in bits 1..0."""

    value: int

    def mtype(self) -> MType:
        return mtype_from_bits((self.value >> 5) & 0b111)

    def major(self) -> int:
        return self.value & 0b11

    def to_bytes(self) -> bytes:
        return bytes([self.value])


@dataclass(frozen=True)
class FCtrlUplink:
    """Uplink frame control byte."""

    value: int

    def adr(self) -> bool:
        return bool(self.value & 0x80)

    def adr_ack_req(self) -> bool:
        return bool(self.value & 0x40)

    def ack(self) -> bool:
        return bool(self.value & 0x20)

    def fpending(self) -> bool:
        return bool(self.value & 0x10)

    def fopts_len(self) -> int:
        return self.value & 0x0F

    def to_bytes(self) -> bytes:
        return bytes([self.value])


@dataclass(frozen=True)
class FCtrlDownlink:
    """Downlink frame control byte."""

    value: int

    def adr(self) -> bool:
        return bool(self.value & 0x80)

    def ack(self) -> bool:
        return bool(self.value & 0x20)

    def class_b(self) -> bool:
        return bool(self.value & 0x10)

    def fopts_len(self) -> int:
        return self.value & 0x0F

    def to_bytes(self) -> bytes:
        return bytes([self.value])


FCtrl = Union[FCtrlUplink, FCtrlDownlink]


@dataclass(frozen=True)
class Fhdr:
    """Frame header of a data frame."""

    dev_addr: int
    fctrl: FCtrl
    fcnt: int
    fopts: bytes = b""

    @classmethod
    def read(cls, direction: Direction, reader: BinaryIO) -> "Fhdr":
        (dev_addr,) = struct.unpack("<I", _read_exact(reader, 4))
        fctrl_byte = _read_u8(reader)
        fctrl: FCtrl = (
            FCtrlUplink(fctrl_byte) if direction is Direction.UPLINK else FCtrlDownlink(fctrl_byte)
        )
        (fcnt,) = struct.unpack("<H", _read_exact(reader, 2))
        fopts = _read_exact(reader, fctrl.fopts_len())
        return cls(dev_addr=dev_addr, fctrl=fctrl, fcnt=fcnt, fopts=fopts)

    def to_bytes(self) -> bytes:
        return (
            struct.pack("<I", self.dev_addr)
            + self.fctrl.to_bytes()
            + struct.pack("<H", self.fcnt)
            + bytes(self.fopts)
        )

    def __repr__(self) -> str:
        return (
            f"Fhdr(dev_addr={self.dev_addr:#04x}, fctrl={self.fctrl!r}, "
            f"fcnt={self.fcnt}, fopts={self.fopts!r})"
        )


@dataclass(frozen=True)
class FRMPayload:
    """Application payload of a data frame, tagged with its message type."""

    mtype: MType
    data: bytes

    @classmethod
    def read(cls, mtype: MType, reader: BinaryIO) -> "FRMPayload":
        if not mtype.is_data:
            raise InvalidPacketTypeError(int(mtype))
        return cls(mtype=mtype, data=reader.read())

    def to_bytes(self) -> bytes:
        return bytes(self.data)


@dataclass(frozen=True)
class MACPayload:
    """Data-frame MAC payload: header, optional port and optional payload."""

    fhdr: Fhdr
    fport: Optional[int] = None
    payload: Optional[FRMPayload] = None

    @classmethod
    def read(cls, mtype: MType, direction: Direction, reader: BinaryIO) -> "MACPayload":
        fhdr = Fhdr.read(direction, reader)
        rest = reader.read()
        fport: Optional[int] = None
        payload: Optional[FRMPayload] = None
        if rest:
            fport = rest[0]
            payload = FRMPayload.read(mtype, io.BytesIO(rest[1:]))
        if fport == 0 and fhdr.fctrl.fopts_len() > 0:
            raise InvalidFPortForFoptsError()
        return cls(fhdr=fhdr, fport=fport, payload=payload)

    def to_bytes(self) -> bytes:
        out = self.fhdr.to_bytes()
        if self.fport is not None:
            out += bytes([self.fport])
        if self.payload is not None:
            out += self.payload.to_bytes()
        return out

    def dev_addr(self) -> int:
        return self.fhdr.dev_addr


@dataclass(frozen=True)
class JoinRequest:
    app_eui: int
    dev_eui: int
    dev_nonce: bytes

    @classmethod
    def read(cls, reader: BinaryIO) -> "JoinRequest":
        app_eui, dev_eui = struct.unpack("<QQ", _read_exact(reader, 16))
        return cls(app_eui=app_eui, dev_eui=dev_eui, dev_nonce=_read_exact(reader, 2))

    def to_bytes(self) -> bytes:
        return struct.pack("<QQ", self.app_eui, self.dev_eui) + bytes(self.dev_nonce)

    def __repr__(self) -> str:
        return (
            f"JoinRequest(app_eui={self.app_eui:#08x}, dev_eui={self.dev_eui:#08x}, "
            f"dev_nonce={self.dev_nonce!r})"
        )


@dataclass(frozen=True)
class JoinAccept:
    app_nonce: bytes
    net_id: bytes
    dev_addr: int
    dl_settings: int
    rx_delay: int

    @classmethod
    def read(cls, reader: BinaryIO) -> "JoinAccept":
        app_nonce = _read_exact(reader, 3)
        net_id = _read_exact(reader, 3)
        dev_addr, dl_settings, rx_delay = struct.unpack("<IBB", _read_exact(reader, 6))
        return cls(
            app_nonce=app_nonce,
            net_id=net_id,
            dev_addr=dev_addr,
            dl_settings=dl_settings,
            rx_delay=rx_delay,
        )

    def to_bytes(self) -> bytes:
        return (
            bytes(self.app_nonce)
            + bytes(self.net_id)
            + struct.pack("<IBB", self.dev_addr, self.dl_settings, self.rx_delay)
        )


PHYPayloadFrame = Union[MACPayload, JoinRequest, JoinAccept, bytes]


def _size_invalid(mtype: MType, phy_len: int) -> bool:
    if mtype is MType.JOIN_REQUEST:
        return phy_len != JOIN_REQUEST_LEN
    if mtype is MType.JOIN_ACCEPT:
        return phy_len not in (JOIN_ACCEPT_LEN, JOIN_ACCEPT_WITH_CFLIST_LEN)
    if mtype.is_data:
        return phy_len < DATA_MIN_LEN
    # Proprietary frames have no known minimum length; every invalid type fails.
    return mtype is MType.INVALID


@dataclass(frozen=True)
class PHYPayload:
    """A complete LoRaWAN PHY payload."""

    mhdr: MHDR
    payload: PHYPayloadFrame
    mic: Optional[bytes] = field(default=None)

    @classmethod
    def proprietary(cls, payload: bytes) -> "PHYPayload":
        return cls(mhdr=MHDR(MType.PROPRIETARY << 5), payload=bytes(payload), mic=None)

    @classmethod
    def read(cls, direction: Direction, data: bytes) -> "PHYPayload":
        reader = io.BytesIO(data)
        mhdr = MHDR(_read_u8(reader))
        mtype = mhdr.mtype()
        body = reader.read()

        phy_len = len(body) + 1
        if _size_invalid(mtype, phy_len):
            raise InvalidPacketSizeError(mtype, phy_len)
        if mtype is MType.INVALID:
            raise InvalidPacketTypeError(int(mtype))

        # Proprietary frames are assumed to take over the mic bytes.
        mic: Optional[bytes] = None
        if mtype is not MType.PROPRIETARY:
            body, mic = body[:-MIC_LEN], body[-MIC_LEN:]

        frame_reader = io.BytesIO(body)
        frame: PHYPayloadFrame
        if mtype is MType.JOIN_REQUEST:
            frame = JoinRequest.read(frame_reader)
        elif mtype is MType.JOIN_ACCEPT:
            frame = JoinAccept.read(frame_reader)
        elif mtype is MType.PROPRIETARY:
            frame = frame_reader.read()
        else:
            frame = MACPayload.read(mtype, direction, frame_reader)
        return cls(mhdr=mhdr, payload=frame, mic=mic)

    def to_bytes(self) -> bytes:
        frame = self.payload
        body = bytes(frame) if isinstance(frame, (bytes, bytearray)) else frame.to_bytes()
        out = self.mhdr.to_bytes() + body
        if self.mic is not None:
            out += bytes(self.mic)
        return out

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def mtype(self) -> MType:
        return self.mhdr.mtype()

    def fcnt(self) -> Optional[int]:
        if isinstance(self.payload, MACPayload):
            return self.payload.fhdr.fcnt
        return None