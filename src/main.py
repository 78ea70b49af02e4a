"""
Unplayer Queue - Main Entry Point

Enqueues the files given on the command line and prints the resulting queue.
"""

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional


def parse_arguments(arguments: List[str]) -> List[str]:
    """Keep the arguments naming existing files, as absolute paths"""
    parsed = []
    for argument in arguments:
        path = Path(argument)
        if path.is_file():
            parsed.append(str(path.resolve()))
        else:
            logging.getLogger(__name__).warning("Skipping %s: not a file", argument)
    return parsed


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point"""
    parser = argparse.ArgumentParser(prog="unplayer-queue", description=__doc__)
    parser.add_argument("files", nargs="*", help="audio files to enqueue")
    parser.add_argument("--shuffle", action=argparse.BooleanOptionalAction, default=None,
                        help="turn shuffle on or off")
    parser.add_argument("--repeat", choices=["none", "all", "one"], help="repeat mode")
    parser.add_argument("--config", help="configuration file path")
    parser.add_argument("--timeout", type=float, default=30.0,
                        help="seconds to wait for track loading")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from app.container_factory import AppContainerFactory
    from app.events import EventType

    file_paths = parse_arguments(args.files)
    if not file_paths:
        parser.error("no playable files given")

    container = AppContainerFactory.create(args.config)
    try:
        queue = container.queue
        if args.shuffle is not None:
            queue.set_shuffle(args.shuffle)
        if args.repeat:
            queue.set_repeat_mode(args.repeat)

        loaded = threading.Event()
        container.event_bus.subscribe(EventType.TRACKS_LOADED, lambda _: loaded.set())
        queue.add_tracks(file_paths)
        if not loaded.wait(args.timeout):
            logging.getLogger(__name__).warning("Track loading did not finish in %.1fs", args.timeout)

        for index, track in enumerate(queue.tracks):
            marker = ">" if index == queue.current_index else " "
            print(f"{marker} {index + 1:3d}. {track.artist} - {track.display_title} [{track.duration_str}]")
        print(f"shuffle: {'on' if queue.shuffle else 'off'}, repeat: {queue.repeat_mode.value}")
    finally:
        container.cleanup()

    return 0


if __name__ == "__main__":
    sys.exit(main())
