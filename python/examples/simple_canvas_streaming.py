#!/usr/bin/env python3
"""
Simple canvas streaming.

Draws a bouncing ball on a Pillow canvas and streams every frame to the
video wall. The canvas is larger than the wall, so frames are stretched
to fit (pass --crop to show only the center).
"""

import argparse
import logging
import time

from PIL import Image, ImageDraw

from videowall import VideoWall

CANVAS_WIDTH = 560
CANVAS_HEIGHT = 152
RADIUS = 20


def main():
    parser = argparse.ArgumentParser(description="Stream a bouncing ball to the video wall")
    parser.add_argument("--host", default="10.11.6.250", help="Video wall controller address")
    parser.add_argument("--port", type=int, default=7000)
    parser.add_argument("--crop", action="store_true", help="Crop instead of stretch")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    wall = VideoWall(args.host, args.port)
    if args.crop:
        wall.set_scale_mode(VideoWall.CROP)
    if not wall.start():
        return

    print("Streaming canvas. Press Ctrl+C to stop.")

    x, y = float(RADIUS), float(RADIUS)
    dx, dy = 4.0, 2.5
    canvas = Image.new("RGB", (CANVAS_WIDTH, CANVAS_HEIGHT))
    draw = ImageDraw.Draw(canvas)
    try:
        while True:
            draw.rectangle((0, 0, CANVAS_WIDTH, CANVAS_HEIGHT), fill=(0, 0, 40))
            draw.ellipse((x - RADIUS, y - RADIUS, x + RADIUS, y + RADIUS), fill=(255, 200, 0))
            wall.stream_image(canvas)

            x += dx
            y += dy
            if x < RADIUS or x > CANVAS_WIDTH - RADIUS:
                dx = -dx
            if y < RADIUS or y > CANVAS_HEIGHT - RADIUS:
                dy = -dy
            time.sleep(1 / 60)  # ~60 FPS, one frame per screen refresh
    except KeyboardInterrupt:
        print("\nStopping...")

    wall.dispose()


if __name__ == "__main__":
    main()
