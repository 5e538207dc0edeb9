"""Helium subnet and LoRaWAN DevAddr/NetID arithmetic.

Names follow the LoRaWAN specification closely. All values are treated as
unsigned 32-bit integers.
"""

from __future__ import annotations

from typing import Sequence

RETIRED_NETID = 0x200010

_U32 = 0xFFFFFFFF
_ADDR_LEN = (25, 24, 20, 17, 15, 13, 10, 7)
_ID_LEN = (6, 6, 9, 11, 12, 13, 15, 17)
_ID_MASK = (1 << 21) - 1


def is_local_devaddr(devaddr: int, netid_list: Sequence[int]) -> bool:
    """Tell whether a DevAddr belongs to one of the given (ordered) NetIDs."""
    return is_local_netid(parse_netid(devaddr), netid_list)


def devaddr_from_subnet(subnetaddr: int, netid_list: Sequence[int]) -> int:
    """Translate a subnet address into a LoRaWAN DevAddr."""
    netid = _subnet_addr_to_netid(subnetaddr, netid_list)
    lower, _upper = netid_addr_range(netid, netid_list)
    return devaddr(netid, subnetaddr - lower)


def subnet_from_devaddr(devaddr: int, netid_list: Sequence[int]) -> int:
    """Translate a LoRaWAN DevAddr into a subnet address."""
    netid = parse_netid(devaddr)
    lower, _upper = netid_addr_range(netid, netid_list)
    return (lower + nwk_addr(devaddr)) & _U32


def netid_class(netid: int) -> int:
    """The NetID type held in bits 23..21 of a NetID."""
    return (netid >> 21) & 0xFF


def addr_len(netclass: int) -> int:
    """Width of the network address part of a DevAddr for a NetID class."""
    return _ADDR_LEN[netclass] if 0 <= netclass < len(_ADDR_LEN) else 0


def id_len(netclass: int) -> int:
    """Width of the NetID part of a DevAddr for a NetID class."""
    return _ID_LEN[netclass] if 0 <= netclass < len(_ID_LEN) else 0


def _subnet_addr_to_netid(subnetaddr: int, netid_list: Sequence[int]) -> int:
    return next(
        (netid for netid in netid_list if _subnet_addr_within_range(subnetaddr, netid, netid_list)),
        0,
    )


def _subnet_addr_within_range(subnetaddr: int, netid: int, netid_list: Sequence[int]) -> bool:
    lower, upper = netid_addr_range(netid, netid_list)
    return lower <= subnetaddr < upper


def _var_net_class(netclass: int) -> int:
    if not 1 <= netclass <= 7:
        return 0
    # Prefix of `netclass` ones followed by a zero.
    prefix = ((1 << netclass) - 1) << 1
    return (prefix << id_len(netclass)) & _U32


def _var_netid(netclass: int, netid: int) -> int:
    return (netid << addr_len(netclass)) & _U32


def devaddr(netid: int, nwkaddr: int) -> int:
    """Build a DevAddr from a NetID and a network address."""
    netclass = netid_class(netid)
    addr = _var_net_class(netclass) | (netid & _ID_MASK)
    return (_var_netid(netclass, addr) | nwkaddr) & _U32


def is_local_netid(netid: int, netid_list: Sequence[int]) -> bool:
    """Tell whether a NetID is the retired one or in the given list."""
    return netid == RETIRED_NETID or netid in netid_list


def netid_type(devaddr: int) -> int:
    """The NetID type encoded by the leading-ones prefix of a DevAddr."""
    first = (devaddr & _U32) >> 24
    for index in range(7, -1, -1):
        if not first & (1 << index):
            return 7 - index
    return 0


def parse_netid(devaddr: int) -> int:
    """Extract the NetID from a DevAddr."""
    net_type = netid_type(devaddr)
    prefix_len = net_type + 1
    shifted = ((devaddr & _U32) << (prefix_len - 1)) & _U32
    netid = shifted >> (31 - id_len(net_type))
    return netid | (net_type << 21)


def netid_addr_range(netid: int, netid_list: Sequence[int]) -> tuple[int, int]:
    """The subnet address range [lower, upper) taken by a NetID in the list."""
    lower = upper = 0
    if netid in netid_list:
        for item in netid_list:
            size = netid_size(item)
            if item == netid:
                upper += size
                break
            lower += size
            upper = lower
    return lower, upper


def nwk_addr(devaddr: int) -> int:
    """The network address part of a DevAddr."""
    length = addr_len(netid_class(parse_netid(devaddr)))
    return devaddr & ((1 << length) - 1)


def netid_size(netid: int) -> int:
    """Number of device addresses available to a NetID."""
    return 1 << addr_len(netid_class(netid))