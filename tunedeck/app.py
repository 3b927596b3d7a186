"""The interactive player: the command loop and the remote control listener."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Iterable, TextIO

from tunedeck.dispatch import handle_command
from tunedeck.player import AudioBackend, PygameBackend
from tunedeck.screens import show
from tunedeck.state import AppState, ControlMode
from tunedeck.uart import listen

DEFAULT_LOG = "log.json"
DEFAULT_DEVICE = "/dev/ttyACM1"


def run(
    state: AppState,
    path,
    audio: AudioBackend,
    lines: Iterable[str],
    stop_event: threading.Event | None = None,
    out: TextIO | None = None,
) -> None:
    """Initialise, then handle typed lines until quit, end of input or stop_event.

    stop_event is set on return so that other workers stop too.
    """
    stop = stop_event if stop_event is not None else threading.Event()
    try:
        handle_command("", state, path, audio)
        show(state, out)
        commands = iter(lines)
        while state.mode is not ControlMode.QUIT_PROGRAM and not stop.is_set():
            line = next(commands, None)
            if line is None:
                break
            handle_command(line.rstrip("\n"), state, path, audio)
            show(state, out)
    finally:
        stop.set()


def main(argv: list[str] | None = None) -> int:
    """Start the player with its remote control listener."""
    parser = argparse.ArgumentParser(prog="tunedeck", description="Terminal music player.")
    parser.add_argument("--log", default=DEFAULT_LOG, help="JSON file holding the library and playlists")
    parser.add_argument("--device", default=DEFAULT_DEVICE, help="serial device of the remote control board")
    args = parser.parse_args(argv)

    state = AppState()
    audio = PygameBackend()
    stop = threading.Event()
    out = sys.stdout
    listener = threading.Thread(
        target=listen,
        args=(args.device, state, audio, stop, lambda s: show(s, out)),
        daemon=True,
    )
    listener.start()
    try:
        run(state, args.log, audio, sys.stdin, stop, out)
    finally:
        stop.set()
        listener.join()
    return 0