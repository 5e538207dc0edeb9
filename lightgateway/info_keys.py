"""Keys naming the pieces of gateway information that can be queried."""

from __future__ import annotations

from enum import Enum

from lightgateway.errors import Error

DEFAULT_INFO_KEYS = "fw,key,onboarding,name,region,gateway"


class InfoKeyParseError(Error):
    """A string does not name an information key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"invalid key: {key}")


class InfoKey(Enum):
    FW = "fw"
    KEY = "key"
    ONBOARDING_KEY = "onboarding"
    NAME = "name"
    GATEWAY = "gateway"
    REGION = "region"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "InfoKey":
        try:
            return cls(text)
        except ValueError:
            raise InfoKeyParseError(text) from None


def parse_info_keys(text: str) -> list[InfoKey]:
    """Parse a comma separated list of information keys."""
    return [InfoKey.parse(part.strip()) for part in text.split(",")]