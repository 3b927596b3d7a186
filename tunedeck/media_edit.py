"""Commands of the screens that edit one media file."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Any

from tunedeck import player
from tunedeck.library import (
    MEDIA_PLAYLIST,
    load_media_library,
    load_playlists,
    read_log,
    refresh_current_media,
    refresh_current_playlist,
    refresh_selected_media,
    refresh_selected_playlist,
    write_log,
)
from tunedeck.player import AudioBackend
from tunedeck.state import AppState, ControlMode

_INDEX = re.compile(r"\s*([+-]?\d+)")

_MENU = {
    "q": ControlMode.MEDIA_FILE_MAIN_SCREEN,
    "p": ControlMode.EDIT_MEDIA_FILE_PLAY,
    "1": ControlMode.EDIT_MEDIA_FILE_EDIT_TITLE,
    "2": ControlMode.EDIT_MEDIA_FILE_EDIT_ARTIST,
    "3": ControlMode.EDIT_MEDIA_FILE_EDIT_ALBUM,
    "4": ControlMode.EDIT_MEDIA_FILE_EDIT_GENRE,
    "a": ControlMode.EDIT_MEDIA_FILE_ADD_TO_PLAYLIST,
}

_FIELDS = {
    ControlMode.EDIT_MEDIA_FILE_EDIT_TITLE: "title",
    ControlMode.EDIT_MEDIA_FILE_EDIT_ARTIST: "artist",
    ControlMode.EDIT_MEDIA_FILE_EDIT_ALBUM: "album",
    ControlMode.EDIT_MEDIA_FILE_EDIT_GENRE: "genre",
}


def _parse_index(command: str) -> int | None:
    match = _INDEX.match(command)
    return int(match.group(1)) if match else None


def _reload(state: AppState, path) -> None:
    load_media_library(state, path)
    load_playlists(state, path)
    refresh_current_playlist(state)
    refresh_selected_playlist(state)
    refresh_selected_media(state)
    refresh_current_media(state)


def handle_menu(command: str, state: AppState) -> None:
    """React to a command typed on the media file's edit screen."""
    mode = _MENU.get(command)
    if mode is not None:
        state.mode = mode


def play_selected(state: AppState, audio: AudioBackend) -> None:
    """Play the selected file within the whole-library playlist."""
    with state.lock:
        library_playlist = state.find_playlist(MEDIA_PLAYLIST)
        if library_playlist is not None:
            state.current_playlist = library_playlist
        selected_path = state.selected_media.path
        for index, media in enumerate(state.current_playlist.media):
            if media.path == selected_path:
                state.media_index = index
        state.current_media = state.selected_media
        player.play(state, audio)
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN


def edit_metadata(command: str, state: AppState, path) -> None:
    """Store the typed text in the tag the current edit screen is for."""
    with state.lock:
        field = _FIELDS.get(state.mode)
        if field is not None:
            metadata = replace(state.selected_media.metadata)
            metadata.set_field(field, command)
        _reload(state, path)
        state.mode = ControlMode.EDIT_MEDIA_FILE_MAIN_SCREEN


def add_to_playlist(command: str, state: AppState, path) -> None:
    """Add the selected file to the playlist with the typed one-based number."""
    if command == "q":
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN
        return
    index = _parse_index(command)
    with state.lock:
        if index is None or not 1 <= index <= len(state.playlists):
            return
        name = state.playlists[index - 1].name
        media_path = state.selected_media.path
        try:
            log: Any = read_log(path)
        except OSError:
            return
        if log is None:
            log = {}
        if not isinstance(log, dict):
            raise TypeError("the log is not a JSON object")
        section = log.get("playlist")
        if section is None:
            section = log["playlist"] = {}
        elif not isinstance(section, dict):
            raise TypeError("the playlist section of the log is not an object")
        files = section.get(name)
        if files is None:
            files = section[name] = []
        elif not isinstance(files, list):
            raise TypeError(f"playlist {name!r} in the log is not a list")
        if media_path not in files:
            files.append(media_path)
        try:
            write_log(path, log)
        except OSError:
            return
        _reload(state, path)
        state.mode = ControlMode.MEDIA_FILE_MAIN_SCREEN