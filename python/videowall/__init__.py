# Sensor Lab Video Wall streamer
from .errors import ErrorKind, StreamError, log_error
from .raster import Raster, as_raster
from .resample import ScaleMode, resample
from .videowall import (
    BUFFER_LENGTH,
    MAGIC,
    STREAM_IMAGE_HEIGHT,
    STREAM_IMAGE_WIDTH,
    VERSION,
    StreamState,
    VideoWall,
    packet_length,
)

__version__ = VERSION

__all__ = [
    "BUFFER_LENGTH",
    "ErrorKind",
    "MAGIC",
    "Raster",
    "STREAM_IMAGE_HEIGHT",
    "STREAM_IMAGE_WIDTH",
    "ScaleMode",
    "StreamError",
    "StreamState",
    "VideoWall",
    "as_raster",
    "log_error",
    "packet_length",
    "resample",
]
