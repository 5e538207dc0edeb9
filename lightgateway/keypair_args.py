"""Arguments carried in the query string of a keypair URI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, TypeVar
from urllib.parse import parse_qsl, urlsplit

from lightgateway.errors import KeypairUriError

T = TypeVar("T")


class Network(Enum):
    MAIN_NET = "mainnet"
    TEST_NET = "testnet"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Network":
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"unknown network: {text!r}") from None


@dataclass(frozen=True)
class KeypairArgs:
    """Named string arguments taken from a keypair URI's query."""

    args: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_uri(cls, url: str) -> "KeypairArgs":
        try:
            query = urlsplit(url).query
            pairs = parse_qsl(query, keep_blank_values=True, errors="strict")
        except (ValueError, UnicodeError) as err:
            raise KeypairUriError(f'invalid keypair url "{url}": {err!r}') from err
        return cls(dict(pairs))

    def get(self, name: str, default: T, convert: Callable[[str], T] = str) -> T:
        """The converted argument ``name``, or ``default`` when it is absent."""
        if name not in self.args:
            return default
        try:
            return convert(self.args[name])
        except (ValueError, TypeError) as err:
            raise KeypairUriError(f"invalid uri argument for {name}: {err!r}") from err