"""Text blocks shared by the screens, and the main menu and playback screens."""

from __future__ import annotations

from tunedeck.media import MediaFile, Playlist
from tunedeck.state import AppState


def _text(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


def board_status(state: AppState) -> str:
    """Whether the remote board is connected, and the volume."""
    status = "Board Connected" if state.board_connected else "Connecting to Board....."
    return _text(status, f"Volumn: {state.volume:g}")


def playlist_listing(playlist: Playlist) -> str:
    """The playlist's name and its songs, numbered from one."""
    header = f"Playlist: {playlist.name}"
    if not playlist.media:
        return _text(header, "Playlist is empty")
    songs = (
        f"{number}. Song: {media.metadata.title} - by {media.metadata.artist}."
        for number, media in enumerate(playlist.media, start=1)
    )
    return _text(header, *songs)


def current_playlist(state: AppState) -> str:
    """The name of the playlist being played."""
    return _text(f"Current Playlist: {state.current_playlist.name}")


def media_details(media: MediaFile) -> str:
    """File name, tags and length of a media file."""
    tags = media.metadata
    return _text(
        media.name,
        f"🎵 Title {tags.title} - {tags.artist}",
        f"📀 Album: {tags.album} | 🎼 Genre: {tags.genre}",
        f"⏱️ Length: {tags.length} sec",
    )


def current_track(state: AppState) -> str:
    """Playback status and the details of the current track."""
    status = "Now Playing......." if state.playing else "Pause......."
    return _text(status) + media_details(state.current_media)


def media_library(state: AppState) -> str:
    """The files of the media library, numbered from one."""
    header = "Media File Library: "
    if not state.library:
        return _text(header, "Media File Library is empty")
    files = (f"{number}. File: {media.name}" for number, media in enumerate(state.library, start=1))
    return _text(header, *files)


def main_menu_screen(state: AppState) -> str:
    """The main menu."""
    return (
        board_status(state)
        + current_track(state)
        + _text(
            "",
            "Select Option",
            "[1]. Play Music Controller",
            "[2]. Playlist Manager",
            "[3]. Media File Manager",
            "[q]. To Quit Program",
        )
    )


def _playback_header(state: AppState) -> str:
    return (
        board_status(state)
        + playlist_listing(state.current_playlist)
        + _text("")
        + current_track(state)
        + _text("")
    )


def music_play_screen(state: AppState) -> str:
    """The playback screen."""
    return _playback_header(state) + _text(
        "Enter: p (pause/resume), n (next), b (previous), v (set volumn), q (quit to main manu)"
    )


def volume_screen(state: AppState) -> str:
    """The screen asking for a new volume."""
    return _playback_header(state) + _text("Enter Volumn (Range 0~128): ")