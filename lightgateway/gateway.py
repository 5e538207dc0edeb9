"""Gateway-side packet construction for beacon transmission."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Optional

from lightgateway.beacon import Beacon
from lightgateway.errors import Error
from lightgateway.lorawan import PHYPayload

DOWNLINK_TIMEOUT_SECS = 5
UPLINK_TIMEOUT_SECS = 6

MODULATION_LORA = "LORA"
CODING_RATE_4_5 = "4/5"


class GatewayError(Error):
    """Base error for gateway transmit handling."""


class NoBeaconTxPowerError(GatewayError):
    def __init__(self) -> None:
        super().__init__("unknown beacon tx power")


class BeaconTxFailureError(GatewayError):
    def __init__(self) -> None:
        super().__init__("beacon transmit failed")


@dataclass(frozen=True)
class BeaconResp:
    """Outcome of a beacon transmission: power used and concentrator timestamp."""

    powe: int
    tmst: int


@dataclass(frozen=True)
class TxPk:
    """A packet forwarder transmit request (``txpk`` of a PULL_RESP)."""

    imme: bool
    ipol: bool
    modu: str
    codr: str
    datr: str
    freq: float
    data: bytes
    powe: int
    rfch: int = 0
    tmst: Optional[int] = None
    tmms: Optional[int] = None
    fdev: Optional[int] = None
    prea: Optional[int] = None
    ncrc: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        """The JSON object form used on the wire; unset optional fields are left out."""
        result: dict[str, Any] = {
            "imme": self.imme,
            "ipol": self.ipol,
            "modu": self.modu,
            "codr": self.codr,
            "datr": self.datr,
            "freq": self.freq,
            "rfch": self.rfch,
            "powe": self.powe,
            "size": len(self.data),
            "data": base64.b64encode(self.data).decode("ascii"),
        }
        optional = {
            "tmst": self.tmst,
            "tmms": self.tmms,
            "fdev": self.fdev,
            "prea": self.prea,
            "ncrc": self.ncrc,
        }
        result.update({key: value for key, value in optional.items() if value is not None})
        return result


def beacon_to_pull_resp(beacon: Beacon, tx_power: int) -> TxPk:
    """Build an immediate, non-inverted transmit request carrying a beacon."""
    data = PHYPayload.proprietary(beacon.data).to_bytes()
    return TxPk(
        imme=True,
        ipol=False,
        modu=MODULATION_LORA,
        codr=CODING_RATE_4_5,
        datr=str(beacon.datarate),
        freq=beacon.frequency / 1e6,
        data=data,
        powe=tx_power,
        rfch=0,
    )