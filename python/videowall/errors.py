"""Failure reports raised by the video wall streamer."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger("videowall")


class ErrorKind(Enum):
    CONFIGURATION = "configuration"  # bad scale mode, previous mode kept
    ENDPOINT = "endpoint"            # host lookup or socket setup failed
    TRANSPORT = "transport"          # frame not sent, streamer stays open


@dataclass(frozen=True)
class StreamError:
    """
    A failure the streamer reported instead of raising.

    Attributes:
        kind: Which part of the pipeline failed
        message: Human readable description
        exception: The OSError behind the failure, if there was one
    """

    kind: ErrorKind
    message: str
    exception: Optional[BaseException] = None

    def __str__(self) -> str:
        if self.exception is not None:
            return f"{self.message} ({self.exception})"
        return self.message


ErrorHandler = Callable[[StreamError], None]


def log_error(error: StreamError) -> None:
    """Default handler: write the report to the ``videowall`` logger."""
    level = logging.WARNING if error.kind is ErrorKind.CONFIGURATION else logging.ERROR
    logger.log(level, "%s error: %s", error.kind.value, error)
