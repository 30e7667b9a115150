#!/usr/bin/env python3
"""Generate test patterns and stream them to the video wall (no image file needed)."""
import argparse
import colorsys
import logging
import math
import sys
import time

from videowall import STREAM_IMAGE_HEIGHT, STREAM_IMAGE_WIDTH, Raster, ScaleMode, VideoWall

MODES = {"crop": ScaleMode.CROP, "stretch": ScaleMode.STRETCH}


def gradient(width, height, t=0.0):
    """Red-green gradient: red increases left-to-right, green increases top-to-bottom."""
    data = bytearray()
    for y in range(height):
        for x in range(width):
            r = x * 255 // max(width - 1, 1)
            g = y * 255 // max(height - 1, 1)
            data.extend([r, g, 0])
    return Raster.from_bytes(bytes(data), width, height)


def color_bars(width, height, t=0.0):
    """Vertical color bars: white, yellow, cyan, green, magenta, red, blue, black."""
    colors = [
        (255, 255, 255),
        (255, 255, 0),
        (0, 255, 255),
        (0, 255, 0),
        (255, 0, 255),
        (255, 0, 0),
        (0, 0, 255),
        (0, 0, 0),
    ]
    data = bytearray()
    for y in range(height):
        for x in range(width):
            data.extend(colors[x * len(colors) // width])
    return Raster.from_bytes(bytes(data), width, height)


def rainbow(width, height, t=0.0):
    """Rainbow: hue varies diagonally and scrolls with time."""
    data = bytearray()
    for y in range(height):
        for x in range(width):
            hue = ((x + y) / (width + height) + t * 0.25) % 1.0
            r, g, b = colorsys.hsv_to_rgb(hue, 1.0, 1.0)
            data.extend([int(r * 255), int(g * 255), int(b * 255)])
    return Raster.from_bytes(bytes(data), width, height)


def heart(width, height, t=0.0):
    """Red heart on black that pulses between 0.7x and 1.1x."""
    scale = 0.9 + 0.2 * math.sin(2 * math.pi * t)
    data = bytearray()
    for y in range(height):
        # Map to math coords: x in [-1.3, 1.3], y in [-1.2, 1.9] (top=1.9)
        ny = (1.9 - 3.1 * y / max(height - 1, 1)) / scale
        for x in range(width):
            nx = (2.6 * x / max(width - 1, 1) - 1.3) / scale
            # Implicit heart: (x^2 + y^2 - 1)^3 - x^2 * y^3 <= 0
            v = (nx * nx + ny * ny - 1.0) ** 3 - nx * nx * ny * ny * ny
            data.extend([255, 0, 0] if v <= 0 else [0, 0, 0])
    return Raster.from_bytes(bytes(data), width, height)


PATTERNS = {
    "gradient": gradient,
    "bars": color_bars,
    "rainbow": rainbow,
    "heart": heart,
}


def main():
    parser = argparse.ArgumentParser(
        description="Stream a generated test pattern to the video wall"
    )
    parser.add_argument("pattern", choices=list(PATTERNS.keys()), help="Pattern to generate")
    parser.add_argument("--host", default="10.11.6.250")
    parser.add_argument("--port", type=int, default=7000)
    parser.add_argument("--width", type=int, default=STREAM_IMAGE_WIDTH,
                        help="Width the pattern is rendered at")
    parser.add_argument("--height", type=int, default=STREAM_IMAGE_HEIGHT,
                        help="Height the pattern is rendered at")
    parser.add_argument("--mode", choices=list(MODES.keys()), default="stretch")
    parser.add_argument("--fps", type=float, default=30.0)
    parser.add_argument("--seconds", type=float, default=0,
                        help="Stop after this many seconds (0=until Ctrl+C)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%b %d %H:%M:%S",
    )

    render = PATTERNS[args.pattern]
    frame_period = 1.0 / args.fps

    wall = VideoWall(args.host, args.port, scale_mode=MODES[args.mode])
    if not wall.start():
        sys.exit(1)

    logging.info("Streaming '%s' rendered at %dx%d, %.1f fps",
                 args.pattern, args.width, args.height, args.fps)
    t_start = time.monotonic()
    try:
        while True:
            t0 = time.monotonic()
            t = t0 - t_start
            if args.seconds and t >= args.seconds:
                break
            wall.stream_image(render(args.width, args.height, t))

            if wall.frames_sent and wall.frames_sent % 300 == 0:
                logging.debug("Frame %d  %.1f fps", wall.frames_sent,
                              wall.frames_sent / (time.monotonic() - t_start))

            remaining = frame_period - (time.monotonic() - t0)
            if remaining > 0:
                time.sleep(remaining)
    except KeyboardInterrupt:
        pass
    finally:
        wall.dispose()


if __name__ == "__main__":
    main()
