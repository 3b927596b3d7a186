"""Application state shared between the interface and the remote control."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntEnum

from tunedeck.media import MediaFile, Playlist


class ControlMode(IntEnum):
    """The screen the application is on; related screens are consecutive."""

    INIT_PROGRAM = 0
    QUIT_PROGRAM = 1
    MAIN_SCREEN = 2
    MUSIC_PLAY_MAIN_SCREEN = 3
    MUSIC_PLAY_VOLUME_SCREEN = 4
    PLAYLIST_MANAGER_MAIN_SCREEN = 5
    PLAYLIST_MANAGER_PLAYLIST_SELECT_SCREEN = 6
    PLAYLIST_MANAGER_PLAYLIST_EDIT_SCREEN = 7
    PLAYLIST_MANAGER_CREATE_NEW_PLAYLIST_SCREEN = 8
    PLAYLIST_MANAGER_ADD_MEDIA_TO_PLAYLIST_SCREEN = 9
    PLAYLIST_MANAGER_PLAY_PLAYLIST = 10
    PLAYLIST_MANAGER_DELETE_PLAYLIST = 11
    MEDIA_FILE_MAIN_SCREEN = 12
    MEDIA_FILE_ADD_NEW_FILE = 13
    MEDIA_FILE_BROWSE_DIRECTORY = 14
    MEDIA_FILE_SELECT_MEDIA_FILE = 15
    EDIT_MEDIA_FILE_MAIN_SCREEN = 16
    EDIT_MEDIA_FILE_PLAY = 17
    EDIT_MEDIA_FILE_EDIT_TITLE = 18
    EDIT_MEDIA_FILE_EDIT_ARTIST = 19
    EDIT_MEDIA_FILE_EDIT_ALBUM = 20
    EDIT_MEDIA_FILE_EDIT_GENRE = 21
    EDIT_MEDIA_FILE_ADD_TO_PLAYLIST = 22

    def in_range(self, first: ControlMode, last: ControlMode) -> bool:
        """Whether this mode lies between first and last, inclusive."""
        return first <= self <= last


@dataclass
class AppState:
    """Everything the player knows: library, playlists, playback and screen."""

    playlists: list[Playlist] = field(default_factory=list)
    library: list[MediaFile] = field(default_factory=list)
    board_connected: bool = False
    current_media: MediaFile = field(default_factory=MediaFile)
    current_playlist: Playlist = field(default_factory=Playlist)
    media_index: int = 0
    playing: bool = False
    mode: ControlMode = ControlMode.INIT_PROGRAM
    volume: float = 128.0
    line_count: int = 0
    selected_playlist: Playlist = field(default_factory=Playlist)
    selected_media: MediaFile = field(default_factory=MediaFile)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def find_playlist(self, name: str) -> Playlist | None:
        """The last playlist with the given name, or None."""
        return next((playlist for playlist in reversed(self.playlists) if playlist.name == name), None)