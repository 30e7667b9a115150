#!/usr/bin/env python3
"""Send an image file to the video wall via UDP.

Usage:
    python3 tools/stream_image.py path/to/image.png --host 10.0.0.20
    python3 tools/stream_image.py path/to/image.jpg --mode crop --loop
"""
import argparse
import logging
import sys
import time

from PIL import Image

from videowall import ScaleMode, VideoWall

MODES = {"crop": ScaleMode.CROP, "stretch": ScaleMode.STRETCH}


def main():
    parser = argparse.ArgumentParser(description="Send an image to the video wall")
    parser.add_argument("image", help="Path to image file")
    parser.add_argument("--host", default="10.11.6.250")
    parser.add_argument("--port", type=int, default=7000)
    parser.add_argument("--mode", choices=list(MODES.keys()), default="stretch",
                        help="Resize policy for images not at stream size")
    parser.add_argument("--loop", action="store_true", help="Keep resending the image")
    parser.add_argument("--interval", type=float, default=1.0,
                        help="Resend interval in seconds (default: 1.0)")
    parser.add_argument("--log", help="Log file path")
    args = parser.parse_args()

    handlers = [logging.StreamHandler()]
    if args.log:
        handlers.append(logging.FileHandler(args.log))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%b %d %H:%M:%S",
        handlers=handlers,
    )

    try:
        image = Image.open(args.image)
        image.load()
    except FileNotFoundError:
        logging.error("Image not found: %s", args.image)
        sys.exit(1)

    wall = VideoWall(args.host, args.port, scale_mode=MODES[args.mode])
    if not wall.start():
        sys.exit(1)

    try:
        wall.stream_image(image)
        logging.info("Sent %s (%dx%d, %s)", args.image, image.width, image.height, args.mode)
        while args.loop:
            time.sleep(args.interval)
            wall.stream_image(image)
    except KeyboardInterrupt:
        pass
    finally:
        wall.dispose()


if __name__ == "__main__":
    main()
