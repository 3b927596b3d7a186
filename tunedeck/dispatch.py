"""Routing typed commands to the controller of the current screen."""

from __future__ import annotations

from tunedeck import media_edit, media_library, player, playlists
from tunedeck.library import initialize
from tunedeck.player import AudioBackend
from tunedeck.state import AppState, ControlMode

_MAIN_MENU = {
    "1": ControlMode.MUSIC_PLAY_MAIN_SCREEN,
    "2": ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN,
    "3": ControlMode.MEDIA_FILE_MAIN_SCREEN,
    "q": ControlMode.QUIT_PROGRAM,
}


def main_menu(command: str, state: AppState) -> None:
    """React to a command typed on the main menu."""
    mode = _MAIN_MENU.get(command)
    if mode is not None:
        state.mode = mode


def _music(command: str, state: AppState, path, audio: AudioBackend) -> None:
    if state.mode is ControlMode.MUSIC_PLAY_MAIN_SCREEN:
        player.handle_command(command, state, audio)
    elif state.mode is ControlMode.MUSIC_PLAY_VOLUME_SCREEN:
        player.set_volume(command, state, audio)


def _playlist_manager(command: str, state: AppState, path, audio: AudioBackend) -> None:
    mode = state.mode
    if mode is ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN:
        playlists.handle_menu(command, state)
    elif mode is ControlMode.PLAYLIST_MANAGER_PLAYLIST_SELECT_SCREEN:
        playlists.select_playlist(command, state)
    elif mode is ControlMode.PLAYLIST_MANAGER_PLAYLIST_EDIT_SCREEN:
        playlists.handle_selected(command, state)
    elif mode is ControlMode.PLAYLIST_MANAGER_CREATE_NEW_PLAYLIST_SCREEN:
        playlists.create_playlist(command, state, path)
    elif mode is ControlMode.PLAYLIST_MANAGER_ADD_MEDIA_TO_PLAYLIST_SCREEN:
        playlists.add_media(command, state, path)
    elif mode is ControlMode.PLAYLIST_MANAGER_DELETE_PLAYLIST:
        playlists.delete_playlist(state, path)
    elif mode is ControlMode.PLAYLIST_MANAGER_PLAY_PLAYLIST:
        playlists.play_playlist(state, audio)


def _library(command: str, state: AppState, path, audio: AudioBackend) -> None:
    mode = state.mode
    if mode is ControlMode.MEDIA_FILE_MAIN_SCREEN:
        media_library.handle_menu(command, state)
    elif mode is ControlMode.MEDIA_FILE_ADD_NEW_FILE:
        media_library.add_file(command, state, path)
    elif mode is ControlMode.MEDIA_FILE_BROWSE_DIRECTORY:
        media_library.browse_directory(command, state, path)
    elif mode is ControlMode.MEDIA_FILE_SELECT_MEDIA_FILE:
        media_library.select_media(command, state)


def _media_edit(command: str, state: AppState, path, audio: AudioBackend) -> None:
    mode = state.mode
    if mode is ControlMode.EDIT_MEDIA_FILE_MAIN_SCREEN:
        media_edit.handle_menu(command, state)
    elif mode is ControlMode.EDIT_MEDIA_FILE_PLAY:
        media_edit.play_selected(state, audio)
    elif mode.in_range(ControlMode.EDIT_MEDIA_FILE_EDIT_TITLE, ControlMode.EDIT_MEDIA_FILE_EDIT_GENRE):
        media_edit.edit_metadata(command, state, path)
    elif mode is ControlMode.EDIT_MEDIA_FILE_ADD_TO_PLAYLIST:
        media_edit.add_to_playlist(command, state, path)


_SECTIONS = (
    (ControlMode.MUSIC_PLAY_MAIN_SCREEN, ControlMode.MUSIC_PLAY_VOLUME_SCREEN, _music),
    (ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN, ControlMode.PLAYLIST_MANAGER_DELETE_PLAYLIST, _playlist_manager),
    (ControlMode.MEDIA_FILE_MAIN_SCREEN, ControlMode.MEDIA_FILE_SELECT_MEDIA_FILE, _library),
    (ControlMode.EDIT_MEDIA_FILE_MAIN_SCREEN, ControlMode.EDIT_MEDIA_FILE_ADD_TO_PLAYLIST, _media_edit),
)


def handle_command(command: str, state: AppState, path, audio: AudioBackend) -> None:
    """Pass a typed command to the controller of the current screen."""
    with state.lock:
        mode = state.mode
        if mode is ControlMode.INIT_PROGRAM:
            initialize(state, path)
            return
        if mode is ControlMode.MAIN_SCREEN:
            main_menu(command, state)
            return
        for first, last, handler in _SECTIONS:
            if mode.in_range(first, last):
                handler(command, state, path, audio)
                return