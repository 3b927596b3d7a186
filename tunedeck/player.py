"""Music playback: the audio backend and the playback screen's commands."""

from __future__ import annotations

import math
import os
import re
from abc import ABC, abstractmethod

from tunedeck.state import AppState, ControlMode

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

MAX_VOLUME = 128

_NUMBER = re.compile(
    r"\s*([+-]?(?:inf(?:inity)?|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?))",
    re.IGNORECASE,
)


class AudioBackend(ABC):
    """Something that can play one music file at a time.

    Failing operations raise OSError.
    """

    @abstractmethod
    def open(self) -> None:
        """Make the audio device ready."""

    @abstractmethod
    def load_and_play(self, path: str) -> None:
        """Start playing the file at path once."""

    @abstractmethod
    def is_playing(self) -> bool:
        """Whether music is loaded and playing or paused."""

    @abstractmethod
    def is_paused(self) -> bool:
        """Whether the music is paused."""

    @abstractmethod
    def pause(self) -> None:
        """Pause the music."""

    @abstractmethod
    def resume(self) -> None:
        """Resume paused music."""

    @abstractmethod
    def halt(self) -> None:
        """Stop the music."""

    @abstractmethod
    def set_volume(self, volume: float) -> None:
        """Set the volume on a 0 to 128 scale."""


class PygameBackend(AudioBackend):
    """Audio through the pygame mixer."""

    def __init__(self) -> None:
        self._paused = False

    def open(self) -> None:
        if pygame.mixer.get_init():
            return
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=2048)
        except pygame.error as exc:
            raise OSError(str(exc)) from exc

    def load_and_play(self, path: str) -> None:
        try:
            pygame.mixer.music.load(path)
            pygame.mixer.music.play(loops=0)
        except pygame.error as exc:
            raise OSError(str(exc)) from exc
        self._paused = False

    def is_playing(self) -> bool:
        if not pygame.mixer.get_init():
            return False
        return self._paused or pygame.mixer.music.get_busy()

    def is_paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        pygame.mixer.music.pause()
        self._paused = True

    def resume(self) -> None:
        pygame.mixer.music.unpause()
        self._paused = False

    def halt(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.stop()
        self._paused = False

    def set_volume(self, volume: float) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.set_volume(int(volume) / MAX_VOLUME)


def handle_command(command: str, state: AppState, audio: AudioBackend) -> None:
    """React to a command typed on the playback screen."""
    if command == "p":
        pause_or_resume(state, audio)
    elif command == "n":
        next_track(state, audio)
    elif command == "b":
        previous_track(state, audio)
    elif command == "q":
        state.mode = ControlMode.MAIN_SCREEN
    elif command == "v":
        state.mode = ControlMode.MUSIC_PLAY_VOLUME_SCREEN
    elif command == "1" and not audio.is_playing():
        play(state, audio)


def play(state: AppState, audio: AudioBackend) -> None:
    """Play the track at the media index of the current playlist, if possible."""
    with state.lock:
        try:
            audio.open()
        except OSError:
            return
        tracks = state.current_playlist.media
        if not 0 <= state.media_index < len(tracks):
            return
        media = tracks[state.media_index]
        try:
            audio.load_and_play(media.path)
        except OSError:
            return
        audio.set_volume(state.volume)
        state.current_media = media
        state.playing = True


def pause_or_resume(state: AppState, audio: AudioBackend) -> None:
    """Toggle pause while music is playing."""
    with state.lock:
        if not audio.is_playing():
            return
        if audio.is_paused():
            audio.resume()
            state.playing = True
        else:
            audio.pause()
            state.playing = False


def stop(state: AppState, audio: AudioBackend) -> None:
    """Stop the music."""
    with state.lock:
        audio.halt()
        state.playing = False


def next_track(state: AppState, audio: AudioBackend) -> None:
    """Play the next track, wrapping to the first."""
    with state.lock:
        if state.media_index < len(state.current_playlist.media) - 1:
            state.media_index += 1
        else:
            state.media_index = 0
        play(state, audio)


def previous_track(state: AppState, audio: AudioBackend) -> None:
    """Play the previous track, wrapping to the last."""
    with state.lock:
        if state.media_index > 0:
            state.media_index -= 1
        else:
            state.media_index = len(state.current_playlist.media) - 1
        play(state, audio)


def parse_volume(command: str) -> float:
    """Read a volume from the number the text starts with, clamped to 0..128.

    Raises ValueError when the text does not start with a number.
    """
    match = _NUMBER.match(command)
    if match is None:
        raise ValueError(f"not a volume: {command!r}")
    value = float(match.group(1))
    if math.isnan(value):
        raise ValueError(f"not a volume: {command!r}")
    return min(max(value, 0.0), float(MAX_VOLUME))


def set_volume(command: str, state: AppState, audio: AudioBackend) -> None:
    """Apply a typed volume and go back to the playback screen."""
    try:
        volume = parse_volume(command)
    except ValueError:
        return
    with state.lock:
        state.volume = volume
        audio.set_volume(volume)
        state.mode = ControlMode.MUSIC_PLAY_MAIN_SCREEN


def set_volume_remote(command: str, state: AppState, audio: AudioBackend) -> None:
    """Apply a volume sent by the remote board, keeping the current screen."""
    try:
        volume = parse_volume(command)
    except ValueError:
        return
    with state.lock:
        state.volume = volume
        audio.set_volume(volume)