"""Commands of the playlist manager screens."""

from __future__ import annotations

import re
from typing import Any

from tunedeck import player
from tunedeck.library import (
    load_media_library,
    load_playlists,
    read_log,
    refresh_current_playlist,
    refresh_selected_playlist,
    sync_media_playlist,
    write_log,
)
from tunedeck.media import Playlist
from tunedeck.player import AudioBackend
from tunedeck.state import AppState, ControlMode

_INDEX = re.compile(r"\s*([+-]?\d+)")


def _parse_index(command: str) -> int | None:
    match = _INDEX.match(command)
    return int(match.group(1)) if match else None


def _is_mp3(command: str) -> bool:
    return len(command) > 4 and command.endswith(".mp3")


def _as_object(log: Any) -> dict:
    if log is None:
        return {}
    if not isinstance(log, dict):
        raise TypeError("the log is not a JSON object")
    return log


def handle_menu(command: str, state: AppState) -> None:
    """React to a command typed on the playlist manager's main screen."""
    if command == "c":
        state.mode = ControlMode.PLAYLIST_MANAGER_CREATE_NEW_PLAYLIST_SCREEN
    elif command == "s":
        state.mode = ControlMode.PLAYLIST_MANAGER_PLAYLIST_SELECT_SCREEN
    elif command == "q":
        state.mode = ControlMode.MAIN_SCREEN


def select_playlist(command: str, state: AppState) -> None:
    """Select the playlist with the typed one-based number."""
    if command == "q":
        state.mode = ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN
        return
    index = _parse_index(command)
    with state.lock:
        if index is None or not 1 <= index <= len(state.playlists):
            return
        state.selected_playlist = state.playlists[index - 1]
        state.mode = ControlMode.PLAYLIST_MANAGER_PLAYLIST_EDIT_SCREEN


def handle_selected(command: str, state: AppState) -> None:
    """React to a command typed on the selected playlist's screen."""
    if command == "q":
        state.mode = ControlMode.PLAYLIST_MANAGER_PLAYLIST_SELECT_SCREEN
    elif command == "p":
        state.mode = ControlMode.PLAYLIST_MANAGER_PLAY_PLAYLIST
    elif command == "a":
        state.mode = ControlMode.PLAYLIST_MANAGER_ADD_MEDIA_TO_PLAYLIST_SCREEN
    elif command == "d":
        state.mode = ControlMode.PLAYLIST_MANAGER_DELETE_PLAYLIST


def create_playlist(command: str, state: AppState, path) -> None:
    """Create an empty playlist named command in the log, unless it exists."""
    with state.lock:
        try:
            log = _as_object(read_log(path))
        except (OSError, ValueError):
            state.mode = ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN
            return
        section = log.get("playlist")
        if not isinstance(section, dict):
            section = log["playlist"] = {}
        if command in section:
            state.mode = ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN
            return
        section[command] = []
        try:
            write_log(path, log)
        except OSError:
            pass
        load_playlists(state, path)
        state.mode = ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN


def add_media(command: str, state: AppState, path) -> None:
    """Add the MP3 file at the typed path to the library and the selected playlist."""
    edit_screen = ControlMode.PLAYLIST_MANAGER_PLAYLIST_EDIT_SCREEN
    if command == "q":
        state.mode = edit_screen
        return
    with state.lock:
        if not _is_mp3(command):
            state.mode = edit_screen
            return
        name = state.selected_playlist.name
        try:
            log = _as_object(read_log(path))
        except (OSError, ValueError):
            state.mode = edit_screen
            return

        library = log.get("mediaLibrary")
        if not isinstance(library, list):
            library = log["mediaLibrary"] = []
        if command not in library:
            library.append(command)
            try:
                write_log(path, log)
            except OSError:
                pass
            load_media_library(state, path)
            sync_media_playlist(path)

        section = log.get("playlist")
        if not isinstance(section, dict) or name not in section:
            state.mode = edit_screen
            return
        files = section[name]
        if files is None:
            files = section[name] = []
        elif not isinstance(files, list):
            raise TypeError(f"playlist {name!r} in the log is not a list")
        if command in files:
            state.mode = edit_screen
            return
        files.append(command)
        try:
            write_log(path, log)
        except OSError:
            pass

        load_media_library(state, path)
        sync_media_playlist(path)
        load_playlists(state, path)
        refresh_selected_playlist(state)
        refresh_current_playlist(state)
        state.mode = edit_screen


def play_playlist(state: AppState, audio: AudioBackend) -> None:
    """Make the selected playlist current, start playing and show the player."""
    with state.lock:
        state.current_playlist = state.selected_playlist
        player.play(state, audio)
        state.mode = ControlMode.MUSIC_PLAY_MAIN_SCREEN


def delete_playlist(state: AppState, path) -> None:
    """Remove the selected playlist from the log."""
    edit_screen = ControlMode.PLAYLIST_MANAGER_PLAYLIST_EDIT_SCREEN
    with state.lock:
        name = state.selected_playlist.name
        try:
            log = read_log(path)
        except (OSError, ValueError):
            state.mode = edit_screen
            return
        section = log.get("playlist") if isinstance(log, dict) else None
        if not isinstance(section, dict) or name not in section:
            state.mode = edit_screen
            return
        del section[name]
        try:
            write_log(path, log)
        except OSError:
            state.mode = edit_screen
            return
        state.selected_playlist = Playlist()
        load_playlists(state, path)
        refresh_selected_playlist(state)
        refresh_current_playlist(state)
        state.mode = ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN