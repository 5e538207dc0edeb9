import pytest

from lightgateway.errors import (
    ChannelClosedError,
    CustomError,
    DecodeError,
    Error,
    InvalidCrcError,
    InvalidEnvelopeError,
    KeypairUriError,
    NoRegionParamsError,
    NoRegionTxPowerError,
    NoServiceError,
    RegionError,
    ServiceCheckError,
    ServiceError,
    StreamClosedError,
)


@pytest.mark.parametrize(
    "error, message",
    [
        (InvalidEnvelopeError(), "unexpected transaction in envelope"),
        (InvalidCrcError(), "packet crc"),
        (StreamClosedError(), "stream closed"),
        (ChannelClosedError(), "channel closed"),
        (NoServiceError(), "no service"),
        (NoRegionParamsError(), "no region params found or active"),
        (NoRegionTxPowerError(), "no region tx power defined in region params"),
    ],
)
def test_messages(error, message):
    assert str(error) == message


@pytest.mark.parametrize(
    "error, parent, message",
    [
        (InvalidEnvelopeError(), DecodeError, "unexpected transaction in envelope"),
        (InvalidCrcError(), DecodeError, "packet crc"),
        (KeypairUriError("bad uri"), DecodeError, "keypair uri: bad uri"),
        (StreamClosedError(), ServiceError, "stream closed"),
        (ChannelClosedError(), ServiceError, "channel closed"),
        (NoServiceError(), ServiceError, "no service"),
        (ServiceCheckError(10, 5), ServiceError, "block age 10s > 5s"),
        (NoRegionParamsError(), RegionError, "no region params found or active"),
        (
            NoRegionTxPowerError(),
            RegionError,
            "no region tx power defined in region params",
        ),
        (InvalidCrcError(), Error, "packet crc"),
        (NoServiceError(), Error, "no service"),
        (NoRegionParamsError(), Error, "no region params found or active"),
        (CustomError("odd failure"), Error, "odd failure"),
    ],
)
def test_hierarchy(error, parent, message):
    assert isinstance(error, parent)
    assert isinstance(error, Exception)
    assert str(error) == message


def test_custom_error_keeps_message():
    err = CustomError("no region set")
    assert err.message == "no region set"
    assert str(err) == "no region set"


def test_keypair_uri_error_prefix():
    err = KeypairUriError("missing ecc device path")
    assert err.message == "missing ecc device path"
    assert str(err) == "keypair uri: missing ecc device path"


def test_service_check_error_fields():
    err = ServiceCheckError(500, 300)
    assert (err.block_age, err.max_age) == (500, 300)
    assert str(err) == "block age 500s > 300s"


def test_catching_by_base():
    err = NoRegionParamsError()
    assert isinstance(err, RegionError)
    assert isinstance(err, Error)
    assert str(err) == "no region params found or active"