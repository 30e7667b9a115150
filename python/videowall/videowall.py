"""
Sensor Lab Video Wall streamer

Send sketch frames to the video wall controller over UDP, one datagram per
frame.

Packet format:
    bytes 0-2   "IMG" (0x49 0x4D 0x47)
    bytes 3-    width * height pixels, row-major, R G B per pixel (no alpha)

The controller only understands STREAM_IMAGE_WIDTH x STREAM_IMAGE_HEIGHT
frames; anything else is cropped or stretched to that size first.
"""

import logging
import socket
from enum import Enum
from typing import Optional

import numpy as np

from .errors import ErrorHandler, ErrorKind, StreamError, log_error
from .raster import as_raster
from .resample import ScaleMode, resample

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

MAGIC = b"IMG"
HEADER_LENGTH = len(MAGIC)

# Native stream size. Supply frames of this size to skip resampling.
STREAM_IMAGE_WIDTH = 280
STREAM_IMAGE_HEIGHT = 76

# 3 bytes per pixel (R, G, B) + 3 bytes of "IMG"
BUFFER_LENGTH = STREAM_IMAGE_WIDTH * STREAM_IMAGE_HEIGHT * 3 + HEADER_LENGTH


def packet_length(width: int, height: int) -> int:
    """Size of one frame datagram at the given stream resolution."""
    return width * height * 3 + HEADER_LENGTH


class StreamState(Enum):
    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    CLOSED = "closed"


class VideoWall:
    """Stream frames to the video wall over a connected UDP socket."""

    CROP = ScaleMode.CROP
    STRETCH = ScaleMode.STRETCH

    def __init__(
        self,
        host: str,
        port: int,
        width: int = STREAM_IMAGE_WIDTH,
        height: int = STREAM_IMAGE_HEIGHT,
        scale_mode: ScaleMode = ScaleMode.STRETCH,
        on_error: Optional[ErrorHandler] = None
    ):
        """
        Set up the streamer. No socket is opened until start().

        Args:
            host: Host name or IP address of the video wall controller
            port: UDP port of the video wall controller
            width: Stream width in pixels, must match the controller
            height: Stream height in pixels, must match the controller
            scale_mode: How to resize frames that are not width x height
            on_error: Called with a StreamError for every reported failure;
                defaults to logging it
        """
        if not 0 < port <= 0xFFFF:
            raise ValueError(f"port out of range: {port}")
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid stream size {width}x{height}")

        self._host = host
        self._port = port
        self._width = width
        self._height = height
        self._on_error = on_error if on_error is not None else log_error
        self._sock: Optional[socket.socket] = None
        self._state = StreamState.UNINITIALIZED
        self._frames_sent = 0
        self._frames_dropped = 0

        self._scale_mode = ScaleMode.STRETCH
        self.set_scale_mode(scale_mode)

        # Packet buffer is allocated once; only the pixel payload changes per frame
        self._buffer = bytearray(packet_length(width, height))
        self._buffer[:HEADER_LENGTH] = MAGIC
        self._payload = np.frombuffer(
            self._buffer, dtype=np.uint8, offset=HEADER_LENGTH
        ).reshape(height, width, 3)

    @staticmethod
    def version() -> str:
        """Library version."""
        return VERSION

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def width(self) -> int:
        """Stream width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Stream height in pixels."""
        return self._height

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is StreamState.OPEN and self._sock is not None

    @property
    def buffer(self) -> bytes:
        """Copy of the packet buffer as last serialized."""
        return bytes(self._buffer)

    @property
    def frames_sent(self) -> int:
        return self._frames_sent

    @property
    def frames_dropped(self) -> int:
        return self._frames_dropped

    def _report(self, kind: ErrorKind, message: str,
                exception: Optional[BaseException] = None) -> None:
        self._on_error(StreamError(kind, message, exception))

    def set_scale_mode(self, mode) -> None:
        """
        Set how frames are resized to the stream size.

        Args:
            mode: VideoWall.CROP or VideoWall.STRETCH (or their values 1, 2).
                Anything else is reported and the current mode is kept.
        """
        if isinstance(mode, int) and not isinstance(mode, bool):
            try:
                self._scale_mode = ScaleMode(mode)
                return
            except ValueError:
                pass
        self._report(ErrorKind.CONFIGURATION, f"Unrecognized scale mode: {mode!r}")

    def scale_mode(self) -> ScaleMode:
        return self._scale_mode

    def start(self) -> bool:
        """
        Resolve the host and open a UDP socket connected to it.

        Returns:
            True if the streamer is open, False if the failure was reported
        """
        if self._state is StreamState.OPEN:
            return True
        if self._state is StreamState.CLOSED:
            self._report(ErrorKind.ENDPOINT, "Streamer was disposed and cannot be restarted")
            return False

        try:
            infos = socket.getaddrinfo(self._host, self._port, type=socket.SOCK_DGRAM)
        except (socket.gaierror, UnicodeError) as e:
            self._report(ErrorKind.ENDPOINT, f"The host could not be found: {self._host}", e)
            return False

        family, socktype, proto, _, sockaddr = infos[0]
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as e:
            self._report(ErrorKind.ENDPOINT, "Could not open UDP socket", e)
            return False

        # UDP connect only fixes the default destination, nothing goes on the wire
        try:
            sock.connect(sockaddr)
        except OSError as e:
            sock.close()
            self._report(ErrorKind.ENDPOINT,
                         f"Could not connect to {self._host}:{self._port}", e)
            return False

        self._sock = sock
        self._state = StreamState.OPEN
        logger.info("Streaming %dx%d frames to %s:%d",
                    self._width, self._height, self._host, self._port)
        return True

    def stream_image(self, image) -> bool:
        """
        Send one frame to the video wall.

        Args:
            image: Raster, PIL Image or numpy array (h, w, 3|4) of 8-bit RGB(A)

        Returns:
            True if the datagram was handed to the network, False if the
            frame was dropped (the reason goes to the error handler)
        """
        if not self.is_connected:
            self._frames_dropped += 1
            self._report(ErrorKind.TRANSPORT,
                         "Failed to stream image, socket is not connected")
            return False

        raster = as_raster(image)
        if raster.size != (self._width, self._height):
            raster = resample(raster, self._width, self._height, self._scale_mode)

        # Alpha is never sent to save bandwidth
        self._payload[...] = raster.rgb()

        try:
            self._sock.send(self._buffer)
        except OSError as e:
            self._frames_dropped += 1
            self._report(ErrorKind.TRANSPORT, "Failed to send frame", e)
            return False

        self._frames_sent += 1
        return True

    def dispose(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            logger.info("Stopped streaming to %s:%d (%d sent, %d dropped)",
                        self._host, self._port,
                        self._frames_sent, self._frames_dropped)
        self._state = StreamState.CLOSED

    stop = dispose

    def __enter__(self) -> "VideoWall":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return (f"VideoWall(host={self._host!r}, port={self._port}, "
                f"size={self._width}x{self._height}, state={self._state.value})")
