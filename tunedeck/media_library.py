"""Commands of the media library screens."""

from __future__ import annotations

import os
import re
from typing import Any

from tunedeck.library import (
    load_media_library,
    load_playlists,
    read_log,
    refresh_current_playlist,
    refresh_selected_playlist,
    sync_media_playlist,
    write_log,
)
from tunedeck.state import AppState, ControlMode

_INDEX = re.compile(r"\s*([+-]?\d+)")
_AUDIO_SUFFIXES = (".mp3", ".wav")


def _parse_index(command: str) -> int | None:
    match = _INDEX.match(command)
    return int(match.group(1)) if match else None


def _read_log_or_empty(path) -> dict:
    """The log as an object; a missing log reads as empty."""
    try:
        log: Any = read_log(path)
    except OSError:
        return {}
    if log is None:
        return {}
    if not isinstance(log, dict):
        raise TypeError("the log is not a JSON object")
    return log


def _library_entries(log: dict) -> list:
    entries = log.get("mediaLibrary")
    if not isinstance(entries, list):
        entries = log["mediaLibrary"] = []
    return entries


def _save_and_reload(state: AppState, path, log: dict) -> None:
    try:
        write_log(path, log)
    except OSError:
        pass
    load_media_library(state, path)
    sync_media_playlist(path)
    load_playlists(state, path)
    refresh_current_playlist(state)
    refresh_selected_playlist(state)


def handle_menu(command: str, state: AppState) -> None:
    """React to a command typed on the media library's main screen."""
    if command == "q":
        state.mode = ControlMode.MAIN_SCREEN
    elif command == "a":
        state.mode = ControlMode.MEDIA_FILE_ADD_NEW_FILE
    elif command == "b":
        state.mode = ControlMode.MEDIA_FILE_BROWSE_DIRECTORY
    elif command == "s":
        state.mode = ControlMode.MEDIA_FILE_SELECT_MEDIA_FILE


def add_file(command: str, state: AppState, path) -> None:
    """Add the existing MP3 file at the typed path to the library."""
    if command == "q":
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN
        return
    if len(command) <= 4 or not command.endswith(".mp3"):
        return
    try:
        with open(command, "rb"):
            pass
    except OSError:
        return
    with state.lock:
        log = _read_log_or_empty(path)
        entries = _library_entries(log)
        if command not in entries:
            entries.append(command)
            _save_and_reload(state, path, log)
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN


def browse_directory(command: str, state: AppState, path) -> None:
    """Add every MP3 and WAV file of the typed directory to the library."""
    if command == "q":
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN
        return
    with state.lock:
        log = _read_log_or_empty(path)
        entries = _library_entries(log)
        try:
            names = sorted(os.listdir(command))
        except OSError:
            return
        for name in names:
            if len(name) > 4 and name.endswith(_AUDIO_SUFFIXES):
                full_path = f"{command}/{name}"
                if full_path not in entries:
                    entries.append(full_path)
        _save_and_reload(state, path, log)
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN


def select_media(command: str, state: AppState) -> None:
    """Select the library file with the typed one-based number for editing."""
    if command == "q":
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN
        return
    index = _parse_index(command)
    with state.lock:
        if index is None or not 1 <= index <= len(state.library):
            return
        state.selected_media = state.library[index - 1]
        state.mode = ControlMode.EDIT_MEDIA_FILE_MAIN_SCREEN