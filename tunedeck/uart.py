"""The serial remote control board: connecting, reading lines and acting on them."""

from __future__ import annotations

import os
import threading
import time
from typing import Callable

import serial

from tunedeck import player
from tunedeck.player import AudioBackend
from tunedeck.state import AppState

BAUD_RATE = 9600
DOUBLE_PRESS_MS = 1000
RECONNECT_DELAY = 1.0
READ_TIMEOUT = 0.1

Refresh = Callable[[AppState], None]


def _no_refresh(state: AppState) -> None:
    pass


def handle_message(
    message: str,
    state: AppState,
    audio: AudioBackend,
    elapsed_ms: float,
    refresh: Refresh | None = None,
) -> None:
    """Act on one line from the board.

    "P" toggles pause; "N" goes to the next track, or back one track when it
    follows the previous message within a second; anything else is a volume.
    """
    redraw = refresh or _no_refresh
    if message == "P":
        player.pause_or_resume(state, audio)
    elif message == "N":
        if elapsed_ms < DOUBLE_PRESS_MS:
            player.previous_track(state, audio)
            player.previous_track(state, audio)
        else:
            player.next_track(state, audio)
        redraw(state)
    else:
        player.set_volume_remote(message, state, audio)
        redraw(state)


def open_port(device: str) -> serial.Serial:
    """Open the board's serial port at 9600 baud, 8N1, no flow control.

    Raises OSError when the port cannot be opened or configured.
    """
    try:
        return serial.Serial(
            port=device,
            baudrate=BAUD_RATE,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            xonxoff=False,
            rtscts=False,
            timeout=READ_TIMEOUT,
        )
    except (serial.SerialException, ValueError) as exc:
        raise OSError(f"cannot open UART {device}: {exc}") from exc


def is_port_available(device: str) -> bool:
    """Whether the device can be opened for reading and writing."""
    flags = os.O_RDWR | getattr(os, "O_NOCTTY", 0) | getattr(os, "O_SYNC", 0)
    try:
        descriptor = os.open(device, flags)
    except OSError:
        return False
    os.close(descriptor)
    return True


def set_board_status(state: AppState, connected: bool, refresh: Refresh | None = None) -> None:
    """Record whether the board is connected, redrawing when that changes."""
    with state.lock:
        if state.board_connected == connected:
            return
        state.board_connected = connected
    (refresh or _no_refresh)(state)


def _connect(device: str, state: AppState, stop_event: threading.Event, refresh: Refresh | None):
    while not stop_event.is_set():
        if is_port_available(device):
            try:
                port = open_port(device)
            except OSError:
                pass
            else:
                set_board_status(state, True, refresh)
                return port
        else:
            set_board_status(state, False, refresh)
        stop_event.wait(RECONNECT_DELAY)
    return None


def _read_messages(port, state, audio, stop_event, refresh) -> bool:
    """Handle lines until stopped (False) or the port fails (True)."""
    buffer = bytearray()
    last = time.monotonic()
    while not stop_event.is_set():
        try:
            chunk = port.read(1)
        except (serial.SerialException, OSError):
            return True
        if not chunk:
            continue
        if chunk == b"\n":
            message = buffer.decode("utf-8", errors="replace")
            buffer.clear()
            now = time.monotonic()
            elapsed_ms = (now - last) * 1000
            last = now
            handle_message(message, state, audio, elapsed_ms, refresh)
        else:
            buffer += chunk
    return False


def listen(
    device: str,
    state: AppState,
    audio: AudioBackend,
    stop_event: threading.Event,
    refresh: Refresh | None = None,
) -> None:
    """Connect to the board and act on its messages until stop_event is set.

    A lost connection is retried every second.
    """
    while not stop_event.is_set():
        port = _connect(device, state, stop_event, refresh)
        if port is None:
            break
        try:
            disconnected = _read_messages(port, state, audio, stop_event, refresh)
        finally:
            port.close()
        set_board_status(state, False, refresh)
        if not disconnected:
            return
        stop_event.wait(RECONNECT_DELAY)
    set_board_status(state, False, refresh)