# tunedeck

A small music player that runs in the terminal. It keeps a media library
and named playlists in a JSON log file, plays audio files through the
pygame mixer, lets you edit a track's title, artist, album and genre tags
(stored as ID3 tags in MP3 files), and can be driven remotely by a
microcontroller board on a serial port.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running

```
tunedeck
```

Options:

- `--log PATH` – the JSON file holding the library and playlists
  (default `log.json` in the current directory)
- `--device PATH` – the serial device of the remote control board
  (default `/dev/ttyACM1`)

While the menus run, a background thread keeps trying to reach the board
and retries every second when it is not there. The top of every screen
shows whether the board is connected and the current volume. The program
ends when you choose `q` on the main menu or input ends.

## The log file

The log file is plain JSON with two keys. The player writes it indented,
with keys sorted:

```json
{
    "mediaLibrary": [
        "/home/user/Music/first.mp3",
        "/home/user/Music/second.mp3"
    ],
    "playlist": {
        "evening": [
            "/home/user/Music/second.mp3"
        ],
        "mediaFile": [
            "/home/user/Music/first.mp3",
            "/home/user/Music/second.mp3"
        ]
    }
}
```

`mediaLibrary` lists every known file. The playlist named `mediaFile` is
rewritten to match the library whenever the library changes and at start
up; the other playlists are yours. Playlists are shown ordered by name.

## Using the menus

Type a choice and press Enter.

Main menu:

- `1` – music player: `1` starts playing the current playlist when nothing
  is playing, `p` pause/resume, `n` next (wraps to the first track),
  `b` previous (wraps to the last), `v` set the volume (a number, clamped
  to 0–128), `q` back
- `2` – playlist manager: `c` create a playlist, `s` select one by number,
  then `a` add an `.mp3` path (it is also added to the library),
  `d` delete the playlist, `p` play it, `q` back
- `3` – media library: `a` add a single existing `.mp3` file, `b` add every
  `.mp3` and `.wav` file in a directory, `s` select a file by number,
  `q` back
- `q` – quit

After selecting a file in the media library you can press `1`–`4` to edit
its title, artist, album or genre, `p` to play it within the `mediaFile`
playlist, `a` to add it to a playlist chosen by number, or `q` to go back.
An empty value removes the tag.

## Remote control over serial

The board sends one message per line at 9600 baud, 8N1:

- `P` – pause or resume
- `N` – next track; an `N` that arrives less than a second after the
  previous message steps back two tracks instead, so a quick double press
  lands on the track before the one that was playing
- anything else – read as a volume when it starts with a number, clamped
  to 0–128

If the board is unplugged the player carries on and reconnects when it
comes back.

## Using it as a library

- `tunedeck.state.AppState` holds the whole player state;
  `tunedeck.state.ControlMode` names the screens.
- `tunedeck.dispatch.handle_command(command, state, path, audio)` feeds it
  one line of input for the current screen.
- `tunedeck.screens.render(state)` returns the text of the current screen;
  `tunedeck.screens.show(state, out)` clears the terminal and draws it.
- `tunedeck.app.run(state, path, audio, lines, stop_event, out)` runs the
  command loop over any iterable of lines.
- Audio goes through a `tunedeck.player.AudioBackend`;
  `tunedeck.player.PygameBackend` is the one the command uses.
- `tunedeck.metadata.read_tags(path)` and `write_tag(path, field, value)`
  read and write the tags and length directly.
- `tunedeck.uart.listen(device, state, audio, stop_event, refresh)` runs
  the remote control listener.

## What it does not do

- Tags are written to MP3 files only; WAV files show only their length.
- There is no menu to remove a file from the library or from a playlist,
  or to rename a file.
- A track plays once; the player does not move on to the next track by
  itself when one ends, and there is no seeking.