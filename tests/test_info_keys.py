import pytest

from lightgateway.info_keys import (
    DEFAULT_INFO_KEYS,
    InfoKey,
    InfoKeyParseError,
    parse_info_keys,
)


@pytest.mark.parametrize("key", list(InfoKey))
def test_round_trip(key):
    assert InfoKey.parse(str(key)) is key


def test_onboarding_name():
    assert InfoKey.parse("onboarding") is InfoKey.ONBOARDING_KEY


def test_default_keys():
    keys = parse_info_keys(DEFAULT_INFO_KEYS)
    assert keys == [
        InfoKey.FW,
        InfoKey.KEY,
        InfoKey.ONBOARDING_KEY,
        InfoKey.NAME,
        InfoKey.REGION,
        InfoKey.GATEWAY,
    ]
    assert ",".join(str(k) for k in keys) == DEFAULT_INFO_KEYS


def test_whitespace_trimmed():
    assert parse_info_keys(" name , key") == [InfoKey.NAME, InfoKey.KEY]


def test_invalid_key():
    with pytest.raises(InfoKeyParseError) as info:
        parse_info_keys("name,bogus")
    assert info.value.key == "bogus"
    assert str(info.value) == "invalid key: bogus"


def test_empty_part_rejected():
    with pytest.raises(InfoKeyParseError):
        parse_info_keys("name,")