#!/usr/bin/env python3
"""Stream a video file to the video wall via UDP using ffmpeg for decoding.

Frames are decoded at the video's own size; the streamer crops or
stretches them to the wall resolution.
"""
import argparse
import json
import logging
import os
import subprocess
import sys
import time

from videowall import Raster, ScaleMode, VideoWall

MODES = {"crop": ScaleMode.CROP, "stretch": ScaleMode.STRETCH}


def probe_video(path):
    """Return (width, height, fps) of the first video stream using ffprobe."""
    result = subprocess.run(
        [
            "ffprobe", "-v", "quiet",
            "-print_format", "json",
            "-show_streams",
            "-select_streams", "v:0",
            path,
        ],
        capture_output=True, text=True, timeout=10,
    )
    stream = json.loads(result.stdout)["streams"][0]
    # r_frame_rate is like "30/1" or "30000/1001"
    num, den = stream["r_frame_rate"].split("/")
    fps = float(num) / float(den) if float(den) else 30.0
    return int(stream["width"]), int(stream["height"]), fps


def open_ffmpeg(path):
    """Spawn ffmpeg to decode video into raw RGB24 frames on stdout."""
    return subprocess.Popen(
        [
            "ffmpeg",
            "-loglevel", "error",
            "-i", path,
            "-f", "rawvideo",
            "-pix_fmt", "rgb24",
            "-",
        ],
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Stream a video file to the video wall via UDP"
    )
    parser.add_argument("video", help="Path to video file")
    parser.add_argument("--host", default="10.11.6.250")
    parser.add_argument("--port", type=int, default=7000)
    parser.add_argument("--mode", choices=list(MODES.keys()), default="crop")
    parser.add_argument("--fps", type=float, default=None,
                        help="Override frame rate (default: use video's native FPS)")
    parser.add_argument("--loop", action="store_true", help="Loop video indefinitely")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%b %d %H:%M:%S",
    )

    if not os.path.isfile(args.video):
        logging.error("File not found: %s", args.video)
        sys.exit(1)

    try:
        width, height, native_fps = probe_video(args.video)
    except (OSError, ValueError, KeyError, IndexError, subprocess.TimeoutExpired) as e:
        logging.error("Could not probe %s: %s", args.video, e)
        sys.exit(1)

    fps = args.fps if args.fps else native_fps
    frame_period = 1.0 / fps
    frame_size = width * height * 3

    wall = VideoWall(args.host, args.port, scale_mode=MODES[args.mode])
    if not wall.start():
        sys.exit(1)

    logging.info("Streaming %s (%dx%d) at %.1f fps, %s", args.video, width, height, fps, args.mode)
    t_start = time.monotonic()

    try:
        while True:
            proc = open_ffmpeg(args.video)
            while True:
                t0 = time.monotonic()
                frame_data = proc.stdout.read(frame_size)
                if len(frame_data) < frame_size:
                    break
                wall.stream_image(Raster.from_bytes(frame_data, width, height))

                remaining = frame_period - (time.monotonic() - t0)
                if remaining > 0:
                    time.sleep(remaining)
            proc.stdout.close()
            proc.wait()

            if not args.loop:
                break
            logging.info("Loop done, restarting...")
    except KeyboardInterrupt:
        pass
    finally:
        wall.dispose()

    elapsed = time.monotonic() - t_start
    logging.info("Done: %d frames in %.1fs (%.1f fps)", wall.frames_sent, elapsed,
                 wall.frames_sent / elapsed if elapsed > 0 else 0)


if __name__ == "__main__":
    main()
