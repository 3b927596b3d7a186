import os
import threading
import time

import pytest

from tunedeck.media import MediaFile, Playlist
from tunedeck.player import AudioBackend
from tunedeck.state import AppState
from tunedeck.uart import handle_message, is_port_available, listen, open_port, set_board_status


class FakeAudio(AudioBackend):
    def __init__(self, playing=False):
        self.loaded = []
        self.volume = None
        self.playing = playing
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

    def set_volume(self, volume):
        self.volume = volume


def three_tracks(index):
    tracks = [MediaFile(path=f"/m/{n}.mp3", name=f"{n}.mp3") for n in "abc"]
    return AppState(current_playlist=Playlist("mix", tracks), media_index=index)


def test_pause_toggles_without_refresh():
    state = AppState(playing=True)
    audio = FakeAudio(playing=True)
    calls = []
    handle_message("P", state, audio, 5000, calls.append)
    assert audio.paused is True
    assert state.playing is False
    assert calls == []


def test_slow_n_goes_to_next_track():
    state = three_tracks(0)
    audio = FakeAudio()
    calls = []
    handle_message("N", state, audio, 1500, calls.append)
    assert state.media_index == 1
    assert audio.loaded == ["/m/b.mp3"]
    assert calls == [state]


@pytest.mark.parametrize("start, expected", [(2, 0), (0, 1)])
def test_quick_n_goes_back(start, expected):
    state = three_tracks(start)
    handle_message("N", state, FakeAudio(), 200, None)
    assert state.media_index == expected


def test_volume_message_sets_volume_and_refreshes():
    state = AppState()
    audio = FakeAudio()
    calls = []
    handle_message("100", state, audio, 5000, calls.append)
    assert state.volume == 100.0
    assert audio.volume == 100.0
    assert len(calls) == 1


def test_volume_is_clamped():
    state = AppState()
    handle_message("500", state, FakeAudio(), 5000)
    assert state.volume == 128.0


def test_bad_volume_keeps_volume():
    state = AppState(volume=30.0)
    handle_message("abc", state, FakeAudio(), 5000)
    assert state.volume == 30.0


def test_is_port_available(tmp_path):
    existing = tmp_path / "dev"
    existing.write_bytes(b"")
    assert is_port_available(str(existing)) is True
    assert is_port_available(str(tmp_path / "missing")) is False


def test_open_port_missing_device_raises(tmp_path):
    with pytest.raises(OSError):
        open_port(str(tmp_path / "missing"))


def test_set_board_status_refreshes_only_on_change():
    state = AppState()
    calls = []
    set_board_status(state, False, calls.append)
    assert calls == []
    set_board_status(state, True, calls.append)
    assert state.board_connected is True
    assert calls == [state]


def test_listen_stops_without_device(tmp_path):
    state = AppState(board_connected=True)
    stop = threading.Event()
    timer = threading.Timer(0.2, stop.set)
    timer.start()
    listen(str(tmp_path / "missing"), state, FakeAudio(), stop)
    timer.join()
    assert stop.is_set()
    assert state.board_connected is False


def wait_for(condition, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.02)
    return False


def test_listen_reads_lines_from_serial_port():
    master, slave = os.openpty()
    name = os.ttyname(slave)
    state = AppState()
    stop = threading.Event()
    thread = threading.Thread(target=listen, args=(name, state, FakeAudio(), stop))
    thread.start()
    try:
        assert wait_for(lambda: state.board_connected)
        os.write(master, b"42\n")
        assert wait_for(lambda: state.volume == 42.0)
    finally:
        stop.set()
        thread.join(5)
        os.close(master)
        os.close(slave)
    assert not thread.is_alive()
    assert state.board_connected is False