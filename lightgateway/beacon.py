"""Proof-of-coverage beacon construction and entropy handling."""

from __future__ import annotations

import base64
import hashlib
import json
import os
import struct
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterator, Protocol, Sequence

from lightgateway.errors import Error

MAX_BEACON_V0_PAYLOAD_SIZE = 10
MIN_BEACON_V0_PAYLOAD_SIZE = 5
LOCAL_ENTROPY_SIZE = 4
DEFAULT_BEACON_TX_POWER = 27

_U32 = 0xFFFFFFFF
_CHACHA_CONSTANTS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)


class BeaconError(Error):
    """Base error for beacon construction."""


class NoRegionParamsError(BeaconError):
    def __init__(self) -> None:
        super().__init__("no applicable region plan")


class InvalidVersionError(BeaconError):
    def __init__(self) -> None:
        super().__init__("invalid beacon version")


class DataRate(IntEnum):
    SF12BW125 = 0
    SF11BW125 = 1
    SF10BW125 = 2
    SF9BW125 = 3
    SF8BW125 = 4
    SF7BW125 = 5
    SF12BW250 = 6
    SF11BW250 = 7
    SF10BW250 = 8
    SF9BW250 = 9
    SF8BW250 = 10
    SF7BW250 = 11
    SF12BW500 = 12
    SF11BW500 = 13
    SF10BW500 = 14
    SF9BW500 = 15
    SF8BW500 = 16
    SF7BW500 = 17

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RegionParam:
    """One channel of a region's channel plan."""

    channel_frequency: int
    bandwidth: int = 0
    max_eirp: int = 0


class _Rng(Protocol):
    def next_u32(self) -> int: ...

    def next_u64(self) -> int: ...


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _U32


def _quarter_round(x: list[int], a: int, b: int, c: int, d: int) -> None:
    x[a] = (x[a] + x[b]) & _U32
    x[d] = _rotl(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & _U32
    x[b] = _rotl(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & _U32
    x[d] = _rotl(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & _U32
    x[b] = _rotl(x[b] ^ x[c], 7)


class _ChaChaRng:
    """ChaCha keystream generator seeded with a 32 byte key, stream 0."""

    def __init__(self, seed: bytes, rounds: int = 12) -> None:
        if len(seed) != 32:
            raise ValueError("seed must be 32 bytes")
        self._key = struct.unpack("<8I", seed)
        self._rounds = rounds
        self._words = self._stream()

    def _block(self, counter: int) -> list[int]:
        state = [
            *_CHACHA_CONSTANTS,
            *self._key,
            counter & _U32,
            (counter >> 32) & _U32,
            0,
            0,
        ]
        x = list(state)
        for _ in range(self._rounds // 2):
            _quarter_round(x, 0, 4, 8, 12)
            _quarter_round(x, 1, 5, 9, 13)
            _quarter_round(x, 2, 6, 10, 14)
            _quarter_round(x, 3, 7, 11, 15)
            _quarter_round(x, 0, 5, 10, 15)
            _quarter_round(x, 1, 6, 11, 12)
            _quarter_round(x, 2, 7, 8, 13)
            _quarter_round(x, 3, 4, 9, 14)
        return [(a + b) & _U32 for a, b in zip(x, state)]

    def _stream(self) -> Iterator[int]:
        counter = 0
        while True:
            yield from self._block(counter)
            counter += 1

    def next_u32(self) -> int:
        return next(self._words)

    def next_u64(self) -> int:
        low = self.next_u32()
        high = self.next_u32()
        return (high << 32) | low


def _gen_range_inclusive(rng: _Rng, low: int, high: int, bits: int) -> int:
    """Uniform integer in [low, high] using widening-multiply rejection sampling."""
    mask = (1 << bits) - 1
    draw = rng.next_u32 if bits == 32 else rng.next_u64
    span = (high - low + 1) & mask
    if span == 0:
        return draw()
    leading_zeros = bits - span.bit_length()
    zone = ((span << leading_zeros) - 1) & mask
    while True:
        product = draw() * span
        hi, lo = product >> bits, product & mask
        if lo <= zone:
            return (low + hi) & mask


def rand_frequency(region_params: Sequence[RegionParam], rng: _Rng) -> int:
    """Pick the frequency of one region channel at random."""
    if not region_params:
        raise NoRegionParamsError()
    index = _gen_range_inclusive(rng, 0, len(region_params) - 1, 32)
    return region_params[index].channel_frequency


@dataclass(frozen=True)
class Entropy:
    """A piece of entropy with its version and creation timestamp."""

    version: int
    timestamp: int
    data: bytes

    @classmethod
    def local(cls) -> "Entropy":
        """Fresh version 0 entropy from the operating system."""
        return cls(version=0, timestamp=int(time.time()), data=os.urandom(LOCAL_ENTROPY_SIZE))

    @classmethod
    def from_data(cls, data: bytes) -> "Entropy":
        """Version 1 (locally marked) entropy wrapping the given data."""
        return cls(version=1, timestamp=int(time.time()), data=bytes(data))

    def digest(self, hasher: Any) -> None:
        """Feed the data and native-endian timestamp into a hash object."""
        hasher.update(self.data)
        hasher.update(struct.pack("=q", self.timestamp))

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "timestamp": self.timestamp,
            "data": base64.b64encode(self.data).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, value: dict[str, Any]) -> "Entropy":
        try:
            data = base64.b64decode(value["data"], validate=True)
            timestamp = int(value["timestamp"])
        except KeyError as err:
            raise ValueError(f"missing field {err.args[0]}") from err
        return cls(version=int(value.get("version", 0)), timestamp=timestamp, data=data)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "Entropy":
        return cls.from_dict(json.loads(text))

    def __str__(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass
class BeaconReport:
    """A beacon report as submitted to the PoC ingest service."""

    pub_key: bytes
    local_entropy: bytes
    remote_entropy: bytes
    data: bytes
    frequency: int
    channel: int
    datarate: int
    tmst: int
    tx_power: int
    timestamp: int
    signature: bytes


@dataclass(frozen=True)
class Beacon:
    """A PoC beacon derived from remote and local entropy."""

    data: bytes
    frequency: int
    datarate: DataRate
    remote_entropy: Entropy
    local_entropy: Entropy

    @classmethod
    def create(
        cls,
        remote_entropy: Entropy,
        local_entropy: Entropy,
        region_params: Sequence[RegionParam],
    ) -> "Beacon":
        """Build a beacon from a SHA-256 of both entropies seeding a ChaCha12 rng."""
        if remote_entropy.version not in (0, 1):
            raise InvalidVersionError()
        hasher = hashlib.sha256()
        remote_entropy.digest(hasher)
        local_entropy.digest(hasher)
        digest = hasher.digest()
        rng = _ChaChaRng(digest, rounds=12)
        frequency = rand_frequency(region_params, rng)
        payload_size = _gen_range_inclusive(
            rng, MIN_BEACON_V0_PAYLOAD_SIZE, MAX_BEACON_V0_PAYLOAD_SIZE, 64
        )
        return cls(
            data=digest[:payload_size],
            frequency=frequency,
            datarate=DataRate.SF7BW125,
            remote_entropy=remote_entropy,
            local_entropy=local_entropy,
        )

    def beacon_id(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_report(self) -> BeaconReport:
        """An unsigned report; its timestamp is the creation time in nanoseconds."""
        return BeaconReport(
            pub_key=b"",
            local_entropy=self.local_entropy.data,
            remote_entropy=self.remote_entropy.data,
            data=self.data,
            frequency=self.frequency,
            channel=0,
            datarate=int(self.datarate),
            tmst=0,
            tx_power=DEFAULT_BEACON_TX_POWER,
            timestamp=time.time_ns(),
            signature=b"",
        )