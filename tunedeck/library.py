"""Loading and saving the JSON log that holds the media library and playlists."""

from __future__ import annotations

import json
from typing import Any

from tunedeck.media import MediaFile, Playlist
from tunedeck.state import AppState, ControlMode

MEDIA_PLAYLIST = "mediaFile"


def read_log(path) -> Any:
    """Parse the log file.

    Raises OSError when it cannot be read and ValueError when it is not JSON.
    """
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


def write_log(path, data: Any) -> None:
    """Write data to the log file as indented JSON with sorted keys."""
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=4, sort_keys=True, ensure_ascii=False)


def _paths(values: Any) -> list[str]:
    if not isinstance(values, list):
        return []
    return [value for value in values if isinstance(value, str)]


def load_playlists(state: AppState, path) -> None:
    """Replace the state's playlists with those in the log, ordered by name.

    The state is left alone when the log is unreadable or has no playlist section.
    """
    try:
        log = read_log(path)
    except (OSError, ValueError):
        return
    section = log.get("playlist") if isinstance(log, dict) else None
    if not isinstance(section, dict):
        return
    playlists = [
        Playlist(name, [MediaFile.from_path(media_path) for media_path in _paths(songs)])
        for name, songs in sorted(section.items())
    ]
    with state.lock:
        state.playlists = playlists


def load_media_library(state: AppState, path) -> None:
    """Replace the state's media library with the log's.

    A missing log leaves the library alone; an invalid one empties it.
    """
    try:
        log = read_log(path)
    except OSError:
        return
    except ValueError:
        log = None
    entries = log.get("mediaLibrary") if isinstance(log, dict) else None
    library = [MediaFile.from_path(media_path) for media_path in _paths(entries)]
    with state.lock:
        state.library = library


def sync_media_playlist(path) -> None:
    """Store the whole media library in the log as the "mediaFile" playlist."""
    try:
        log = read_log(path)
    except (OSError, ValueError):
        return
    if not isinstance(log, dict) or not isinstance(log.get("mediaLibrary"), list):
        return
    section = log.get("playlist")
    if section is None:
        section = log["playlist"] = {}
    elif not isinstance(section, dict):
        raise TypeError("the playlist section of the log is not an object")
    section[MEDIA_PLAYLIST] = _paths(log["mediaLibrary"])
    try:
        write_log(path, log)
    except OSError:
        return


def refresh_selected_playlist(state: AppState) -> None:
    """Point the selected playlist at the loaded playlist of the same name."""
    with state.lock:
        found = state.find_playlist(state.selected_playlist.name)
        if found is not None:
            state.selected_playlist = found


def refresh_current_playlist(state: AppState) -> None:
    """Point the current playlist at the loaded playlist of the same name."""
    with state.lock:
        found = state.find_playlist(state.current_playlist.name)
        if found is not None:
            state.current_playlist = found


def refresh_selected_media(state: AppState) -> None:
    """Re-read the selected media file from disk."""
    with state.lock:
        state.selected_media = MediaFile.from_path(state.selected_media.path)


def refresh_current_media(state: AppState) -> None:
    """Re-read the current media file from disk."""
    with state.lock:
        state.current_media = MediaFile.from_path(state.current_media.path)


def initialize(state: AppState, path) -> None:
    """Load library and playlists from the log and go to the main screen."""
    load_media_library(state, path)
    sync_media_playlist(path)
    load_playlists(state, path)
    with state.lock:
        state.mode = ControlMode.MAIN_SCREEN