import pytest

from lightgateway.subnet import (
    RETIRED_NETID,
    addr_len,
    devaddr,
    devaddr_from_subnet,
    id_len,
    is_local_devaddr,
    is_local_netid,
    netid_addr_range,
    netid_class,
    netid_size,
    netid_type,
    nwk_addr,
    parse_netid,
    subnet_from_devaddr,
)

LEGACY_NETID = RETIRED_NETID
NETID00 = 0xE00001
NETID01 = 0xC00035
NETID02 = 0x60002D
NETID_EXT = 0xC00050

DEVADDR00 = 0x90000000
DEVADDR01 = 0xFC00D410
DEVADDR02 = 0xE05A0008

NETID_LIST = [NETID00, NETID01, NETID02]


def addr_bit_len(value):
    return addr_len(netid_class(parse_netid(value)))


def test_widths_and_sizes():
    assert addr_len(netid_class(NETID00)) == 7
    assert addr_len(netid_class(NETID01)) == 10
    assert addr_len(netid_class(NETID02)) == 17
    assert netid_size(NETID00) == 128
    assert netid_size(NETID01) == 1024
    assert netid_size(NETID02) == 131072


def test_out_of_range_class_lengths():
    assert addr_len(8) == 0
    assert id_len(8) == 0


def test_is_local_netid():
    assert is_local_netid(NETID01, NETID_LIST) is True
    assert is_local_netid(NETID_EXT, NETID_LIST) is False
    assert is_local_netid(LEGACY_NETID, NETID_LIST) is True


def test_is_local_devaddr():
    assert is_local_devaddr(DEVADDR01, NETID_LIST) is True
    assert is_local_devaddr(DEVADDR00, NETID_LIST) is True
    assert is_local_devaddr(0xADFFFFFF, NETID_LIST) is False


def test_devaddr():
    assert devaddr(LEGACY_NETID, 0) == DEVADDR00
    assert devaddr(NETID01, 16) == DEVADDR01
    assert devaddr(NETID02, 8) == DEVADDR02


@pytest.mark.parametrize(
    "value, expected",
    [(DEVADDR00, 1), (DEVADDR01, 6), (DEVADDR02, 3)],
)
def test_netid_type(value, expected):
    assert netid_type(value) == expected


def test_parse_netid_of_known_devaddrs():
    assert parse_netid(DEVADDR00) == LEGACY_NETID
    assert parse_netid(0xFC00D410) == 0xC00035
    assert parse_netid(DEVADDR01) == NETID01
    assert parse_netid(DEVADDR02) == NETID02


def test_addr_bit_len():
    assert addr_bit_len(DEVADDR00) == 24
    assert addr_bit_len(DEVADDR01) == 10
    assert addr_bit_len(DEVADDR02) == 17


def test_nwk_addr():
    assert nwk_addr(DEVADDR00) == 0
    assert nwk_addr(DEVADDR01) == 16
    assert nwk_addr(DEVADDR02) == 8


def test_legacy_devaddr_maps_to_current_netid():
    subnet0 = subnet_from_devaddr(DEVADDR00, NETID_LIST)
    assert subnet0 == 0
    devaddr000 = devaddr_from_subnet(subnet0, NETID_LIST)
    assert devaddr000 != DEVADDR00
    assert devaddr000 == 0xFE000080
    assert parse_netid(devaddr000) == NETID00


def test_subnet_roundtrips():
    subnet1 = subnet_from_devaddr(DEVADDR01, NETID_LIST)
    assert subnet1 == (1 << 7) + 16
    assert devaddr_from_subnet(subnet1, NETID_LIST) == DEVADDR01

    subnet2 = subnet_from_devaddr(DEVADDR02, NETID_LIST)
    assert subnet2 == (1 << 7) + (1 << 10) + 8
    assert devaddr_from_subnet(subnet2, NETID_LIST) == DEVADDR02


def test_netid_addr_range():
    assert netid_addr_range(NETID00, NETID_LIST) == (0, 128)
    assert netid_addr_range(NETID01, NETID_LIST) == (128, 128 + 1024)
    assert netid_addr_range(NETID_EXT, NETID_LIST) == (0, 0)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0x5BFFFFFF, 0x00002D),
        (0xADFFFFFF, 0x20002D),
        (0xD6DFFFFF, 0x40016D),
        (0xEB6FFFFF, 0x6005B7),
        (0xF5B6FFFF, 0x800B6D),
        (0xFADB7FFF, 0xA016DB),
        (0xFD6DB7FF, 0xC05B6D),
        (0xFEB6DB7F, 0xE16DB6),
        (0xFFFFFFFF, 127),
        (0, 0),
        (1 << 25, 1),
        (1 << 26, 2),
        (0xE009ABCD, 0x600004),
        (46377, 0),
        (0xE0040001, 0x600002),
        (0xE0052784, 0x600002),
        (0x0410BEA3, 0x000002),
    ],
)
def test_parse_netid(value, expected):
    assert parse_netid(value) == expected