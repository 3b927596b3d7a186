import io
import threading

from tunedeck.app import main, run
from tunedeck.library import write_log
from tunedeck.player import AudioBackend
from tunedeck.state import AppState, ControlMode


class FakeAudio(AudioBackend):
    def open(self):
        pass

    def load_and_play(self, path):
        pass

    def is_playing(self):
        return False

    def is_paused(self):
        return False

    def pause(self):
        pass

    def resume(self):
        pass

    def halt(self):
        pass

    def set_volume(self, volume):
        pass


def make_log(tmp_path):
    path = tmp_path / "log.json"
    write_log(path, {"mediaLibrary": [], "playlist": {}})
    return path


def test_run_quits_on_q(tmp_path):
    state = AppState()
    stop = threading.Event()
    out = io.StringIO()
    run(state, make_log(tmp_path), FakeAudio(), ["q\n"], stop, out)
    assert state.mode is ControlMode.QUIT_PROGRAM
    assert stop.is_set()
    assert "Select Option" in out.getvalue()


def test_run_walks_through_screens(tmp_path):
    state = AppState()
    out = io.StringIO()
    run(state, make_log(tmp_path), FakeAudio(), ["2\n", "q\n", "q\n", "ignored\n"], None, out)
    assert state.mode is ControlMode.QUIT_PROGRAM
    assert "List of Playlist: " in out.getvalue()


def test_run_stops_at_end_of_input(tmp_path):
    state = AppState()
    stop = threading.Event()
    run(state, make_log(tmp_path), FakeAudio(), [], stop, io.StringIO())
    assert state.mode is ControlMode.MAIN_SCREEN
    assert stop.is_set()


def test_run_honours_stop_event(tmp_path):
    state = AppState()
    stop = threading.Event()
    stop.set()
    run(state, make_log(tmp_path), FakeAudio(), ["2\n"], stop, io.StringIO())
    assert state.mode is ControlMode.MAIN_SCREEN


def test_main_runs_until_quit(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))
    result = main(["--log", str(make_log(tmp_path)), "--device", str(tmp_path / "missing")])
    assert result == 0
    assert "Select Option" in capsys.readouterr().out