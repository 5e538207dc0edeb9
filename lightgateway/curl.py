"""Fetch a URL with the curl command-line tool."""

from __future__ import annotations

import subprocess
from typing import Callable, Iterable, Optional, TypeVar

from lightgateway.errors import Error

T = TypeVar("T")


class CurlError(Error):
    """curl could not be run or did not succeed."""


class CurlExitError(CurlError):
    """curl exited with a non-zero status."""

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f"command error: exit status {returncode}")


class CurlSignalError(CurlError):
    """curl was terminated by a signal."""

    def __init__(self, signal: Optional[int]) -> None:
        self.signal = signal
        super().__init__(f"terminated with signal {signal!r}")


def get(url: str, args: Iterable[str], parse: Callable[[bytes], T]) -> T:
    """Run ``curl <args> -f <url>`` and hand its standard output to ``parse``."""
    command = ["curl", *args, "-f", str(url)]
    try:
        result = subprocess.run(command, capture_output=True, check=False)
    except OSError as err:
        raise CurlError(f"io error {err!r}") from err
    if result.returncode == 0:
        return parse(result.stdout)
    if result.returncode < 0:
        raise CurlSignalError(-result.returncode)
    raise CurlExitError(result.returncode)