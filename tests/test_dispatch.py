import pytest

from tunedeck.dispatch import handle_command, main_menu
from tunedeck.library import read_log, write_log
from tunedeck.media import MediaFile, Playlist
from tunedeck.player import AudioBackend
from tunedeck.state import AppState, ControlMode


class FakeAudio(AudioBackend):
    def __init__(self):
        self.loaded = []
        self.volume = None
        self.playing = False
        self.paused = False

    def open(self):
        pass

    def load_and_play(self, path):
        self.loaded.append(path)
        self.playing = True
        self.paused = False

    def is_playing(self):
        return self.playing

    def is_paused(self):
        return self.paused

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def halt(self):
        self.playing = False
        self.paused = False

    def set_volume(self, volume):
        self.volume = volume


@pytest.fixture
def log_path(tmp_path):
    path = tmp_path / "log.json"
    write_log(path, {"mediaLibrary": [], "playlist": {}})
    return path


@pytest.mark.parametrize(
    "command, expected",
    [
        ("1", ControlMode.MUSIC_PLAY_MAIN_SCREEN),
        ("2", ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN),
        ("3", ControlMode.MEDIA_FILE_MAIN_SCREEN),
        ("q", ControlMode.QUIT_PROGRAM),
        ("x", ControlMode.MAIN_SCREEN),
    ],
)
def test_main_menu(command, expected):
    state = AppState(mode=ControlMode.MAIN_SCREEN)
    main_menu(command, state)
    assert state.mode is expected


def test_init_loads_log_and_shows_main_screen(log_path):
    state = AppState()
    handle_command("", state, log_path, FakeAudio())
    assert state.mode is ControlMode.MAIN_SCREEN
    assert [p.name for p in state.playlists] == ["mediaFile"]


def test_main_screen_routes_to_main_menu(log_path):
    state = AppState(mode=ControlMode.MAIN_SCREEN)
    handle_command("2", state, log_path, FakeAudio())
    assert state.mode is ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN


def test_music_screen_then_volume(log_path):
    state = AppState(mode=ControlMode.MUSIC_PLAY_MAIN_SCREEN)
    audio = FakeAudio()
    handle_command("v", state, log_path, audio)
    assert state.mode is ControlMode.MUSIC_PLAY_VOLUME_SCREEN
    handle_command("64", state, log_path, audio)
    assert state.volume == 64.0
    assert audio.volume == 64.0
    assert state.mode is ControlMode.MUSIC_PLAY_MAIN_SCREEN


def test_playlist_menu_and_create(log_path):
    state = AppState(mode=ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN)
    handle_command("c", state, log_path, FakeAudio())
    assert state.mode is ControlMode.PLAYLIST_MANAGER_CREATE_NEW_PLAYLIST_SCREEN
    handle_command("road", state, log_path, FakeAudio())
    assert "road" in read_log(log_path)["playlist"]
    assert [p.name for p in state.playlists] == ["road"]
    assert state.mode is ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN


def test_play_playlist_mode_plays_selected(log_path):
    track = MediaFile(path="/music/a.mp3", name="a.mp3")
    state = AppState(
        mode=ControlMode.PLAYLIST_MANAGER_PLAY_PLAYLIST,
        selected_playlist=Playlist("mix", [track]),
    )
    audio = FakeAudio()
    handle_command("", state, log_path, audio)
    assert audio.loaded == ["/music/a.mp3"]
    assert state.current_playlist.name == "mix"
    assert state.playing is True
    assert state.mode is ControlMode.MUSIC_PLAY_MAIN_SCREEN


def test_delete_playlist_mode(tmp_path):
    path = tmp_path / "log.json"
    write_log(path, {"mediaLibrary": [], "playlist": {"mix": []}})
    state = AppState(mode=ControlMode.PLAYLIST_MANAGER_DELETE_PLAYLIST, selected_playlist=Playlist("mix"))
    handle_command("", state, path, FakeAudio())
    assert read_log(path)["playlist"] == {}
    assert state.mode is ControlMode.PLAYLIST_MANAGER_MAIN_SCREEN


def test_library_select(log_path):
    state = AppState(mode=ControlMode.MEDIA_FILE_MAIN_SCREEN, library=[MediaFile(path="x.mp3", name="x.mp3")])
    handle_command("s", state, log_path, FakeAudio())
    assert state.mode is ControlMode.MEDIA_FILE_SELECT_MEDIA_FILE
    handle_command("1", state, log_path, FakeAudio())
    assert state.selected_media.path == "x.mp3"
    assert state.mode is ControlMode.EDIT_MEDIA_FILE_MAIN_SCREEN


def test_edit_menu_routes(log_path):
    state = AppState(mode=ControlMode.EDIT_MEDIA_FILE_MAIN_SCREEN)
    handle_command("1", state, log_path, FakeAudio())
    assert state.mode is ControlMode.EDIT_MEDIA_FILE_EDIT_TITLE


def test_edit_add_to_playlist_quit(log_path):
    state = AppState(mode=ControlMode.EDIT_MEDIA_FILE_ADD_TO_PLAYLIST)
    handle_command("q", state, log_path, FakeAudio())
    assert state.mode is ControlMode.MEDIA_FILE_MAIN_SCREEN


def test_edit_play_returns_to_library(log_path):
    track = MediaFile(path="/music/b.mp3", name="b.mp3")
    state = AppState(
        mode=ControlMode.EDIT_MEDIA_FILE_PLAY,
        playlists=[Playlist("mediaFile", [track])],
        selected_media=track,
    )
    audio = FakeAudio()
    handle_command("", state, log_path, audio)
    assert audio.loaded == ["/music/b.mp3"]
    assert state.mode is ControlMode.MEDIA_FILE_MAIN_SCREEN


def test_quit_mode_ignores_commands(log_path):
    state = AppState(mode=ControlMode.QUIT_PROGRAM)
    handle_command("1", state, log_path, FakeAudio())
    assert state.mode is ControlMode.QUIT_PROGRAM