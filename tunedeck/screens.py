"""Playlist, media library and media edit screens, and choosing the screen to show."""

from __future__ import annotations

import sys
from typing import Callable, TextIO

from tunedeck.state import AppState, ControlMode
from tunedeck.views import (
    board_status,
    main_menu_screen,
    media_library,
    music_play_screen,
    playlist_listing,
    volume_screen,
)

CLEAR_SCREEN = "\033[H\033[2J"


def _text(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


def _numbered_playlists(state: AppState) -> list[str]:
    return [f"{number}. {playlist.name}." for number, playlist in enumerate(state.playlists, start=1)]


def all_playlists(state: AppState) -> str:
    """The names of all playlists, numbered from one."""
    if not state.playlists:
        return _text("List of Playlist: ", "There is no Playlist.")
    return _text("List of Playlist: ", *_numbered_playlists(state))


def playlist_manager_screen(state: AppState) -> str:
    """The playlist manager's main screen."""
    return (
        board_status(state)
        + all_playlists(state)
        + _text("", "Enter: c (create new playlist), s (select playlist), q (quit to main menu).")
    )


def playlist_select_screen(state: AppState) -> str:
    """The screen for choosing a playlist by number."""
    if not state.playlists:
        return board_status(state) + _text("List of Playlist: ", "There is no Playlist.", "Enter q (quit)")
    return board_status(state) + _text(
        "List of Playlist: ",
        *_numbered_playlists(state),
        f"Enter Number In Range (1 ~ {len(state.playlists)}) to Select, q (quit): ",
    )


def _selected_playlist_header(state: AppState) -> str:
    return (
        board_status(state)
        + _text(f"Playlist Name: {state.selected_playlist.name}")
        + playlist_listing(state.selected_playlist)
    )


def playlist_selected_screen(state: AppState) -> str:
    """The screen of the selected playlist."""
    return _selected_playlist_header(state) + _text(
        "Enter:a (add new media file),d (delete playlist), p (play playlist), q (quit):"
    )


def playlist_create_screen(state: AppState) -> str:
    """The screen asking for a new playlist's name."""
    return board_status(state) + all_playlists(state) + _text("", "Enter New Playlist Name: ")


def playlist_add_media_screen(state: AppState) -> str:
    """The screen asking for a file to add to the selected playlist."""
    return _selected_playlist_header(state) + _text("Enter Media File Path (q to quit): ")


def library_screen(state: AppState) -> str:
    """The media library's main screen."""
    return (
        board_status(state)
        + media_library(state)
        + _text("Enter:a (add single media file), b (browse directory), s (select media file), q (quit)")
    )


def library_add_file_screen(state: AppState) -> str:
    """The screen asking for a file to add to the library."""
    return board_status(state) + media_library(state) + _text("", "Enter Media File Path (q to quit): ")


def library_browse_screen(state: AppState) -> str:
    """The screen asking for a directory to add to the library."""
    return board_status(state) + media_library(state) + _text("", "Enter Directory Path (q to quit): ")


def library_select_screen(state: AppState) -> str:
    """The screen for choosing a library file by number."""
    return (
        board_status(state)
        + media_library(state)
        + _text("", f"Enter Number In Range (1 ~ {len(state.library)}) to Select, q (quit): ")
    )


def _media_summary(state: AppState) -> list[str]:
    media = state.selected_media
    tags = media.metadata
    return [
        f"     File Name: {media.name}.",
        f"[1]. Title: {tags.title}.",
        f"[2]. Artist: {tags.artist}.",
        f"[3]. Album: {tags.album}.",
        f"[4]. Genre: {tags.genre}.",
        f"     Length: {tags.length}. (Cannot be Changed)",
        "",
    ]


def edit_main_screen(state: AppState) -> str:
    """The screen of the selected media file."""
    return board_status(state) + _text(
        "Edit Media File: ",
        *_media_summary(state),
        "Enter number 1~4 (edit metadata), p (play), q (quit), a (add to playlist).",
    )


_EDITED_FIELDS = {
    ControlMode.EDIT_MEDIA_FILE_EDIT_TITLE: ("Title", "title"),
    ControlMode.EDIT_MEDIA_FILE_EDIT_ARTIST: ("Artist", "artist"),
    ControlMode.EDIT_MEDIA_FILE_EDIT_ALBUM: ("Album", "album"),
    ControlMode.EDIT_MEDIA_FILE_EDIT_GENRE: ("Genre", "genre"),
}


def edit_field_screen(state: AppState) -> str:
    """The screen asking for a new value of the tag the mode is for."""
    text = board_status(state) + _text(
        "Edit Media File: ", f"     File Name: {state.selected_media.name}.", ""
    )
    edited = _EDITED_FIELDS.get(state.mode)
    if edited is None:
        return text
    label, field = edited
    value = getattr(state.selected_media.metadata, field)
    return text + _text(f"Current {label}: {value}.", f"Enter New {label}: ")


def edit_add_to_playlist_screen(state: AppState) -> str:
    """The screen for adding the selected media file to a playlist."""
    return board_status(state) + _text(
        "Add to Playlist: ",
        *_media_summary(state),
        "Playlist: q (quit)",
        *_numbered_playlists(state),
    )


_SCREENS: dict[ControlMode, Callable[[AppState], str]] = {
    ControlMode.MAIN_SCREEN: main_menu_screen,
    ControlMode.MUSIC_PLAY_MAIN_SCREEN: music_play_screen,
    ControlMode.MUSIC_PLAY_VOLUME_SCREEN: volume_screen,
    ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN: playlist_manager_screen,
    ControlMode.PLAYLIST_MANAGER_PLAYLIST_SELECT_SCREEN: playlist_select_screen,
    ControlMode.PLAYLIST_MANAGER_PLAYLIST_EDIT_SCREEN: playlist_selected_screen,
    ControlMode.PLAYLIST_MANAGER_CREATE_NEW_PLAYLIST_SCREEN: playlist_create_screen,
    ControlMode.PLAYLIST_MANAGER_ADD_MEDIA_TO_PLAYLIST_SCREEN: playlist_add_media_screen,
    ControlMode.MEDIA_FILE_MAIN_SCREEN: library_screen,
    ControlMode.MEDIA_FILE_ADD_NEW_FILE: library_add_file_screen,
    ControlMode.MEDIA_FILE_BROWSE_DIRECTORY: library_browse_screen,
    ControlMode.MEDIA_FILE_SELECT_MEDIA_FILE: library_select_screen,
    ControlMode.EDIT_MEDIA_FILE_MAIN_SCREEN: edit_main_screen,
    ControlMode.EDIT_MEDIA_FILE_EDIT_TITLE: edit_field_screen,
    ControlMode.EDIT_MEDIA_FILE_EDIT_ARTIST: edit_field_screen,
    ControlMode.EDIT_MEDIA_FILE_EDIT_ALBUM: edit_field_screen,
    ControlMode.EDIT_MEDIA_FILE_EDIT_GENRE: edit_field_screen,
    ControlMode.EDIT_MEDIA_FILE_ADD_TO_PLAYLIST: edit_add_to_playlist_screen,
}


def render(state: AppState) -> str:
    """The text of the screen for the current mode; empty for modes without one."""
    with state.lock:
        screen = _SCREENS.get(state.mode)
        return screen(state) if screen else ""


def show(state: AppState, out: TextIO | None = None) -> None:
    """Clear the terminal and draw the current screen, if the mode has one."""
    text = render(state)
    if not text:
        return
    stream = sys.stdout if out is None else out
    stream.write(CLEAR_SCREEN + text)
    stream.flush()