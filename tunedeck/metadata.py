"""Tag and duration metadata of audio files.

MP3 files carry their tags in ID3v2 (versions 2.2 to 2.4) and ID3v1 blocks;
the play length is taken from the first MPEG audio frame. WAV files only
report their length.
"""

from __future__ import annotations

import io
import os
import re
import wave
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

TAG_FIELDS = ("title", "artist", "album", "genre")

GENRES = (
    "Blues", "Classic Rock", "Country", "Dance", "Disco", "Funk", "Grunge",
    "Hip-Hop", "Jazz", "Metal", "New Age", "Oldies", "Other", "Pop", "R&B",
    "Rap", "Reggae", "Rock", "Techno", "Industrial", "Alternative", "Ska",
    "Death Metal", "Pranks", "Soundtrack", "Euro-Techno", "Ambient",
    "Trip-Hop", "Vocal", "Jazz+Funk", "Fusion", "Trance", "Classical",
    "Instrumental", "Acid", "House", "Game", "Sound Clip", "Gospel", "Noise",
    "Alternative Rock", "Bass", "Soul", "Punk", "Space", "Meditative",
    "Instrumental Pop", "Instrumental Rock", "Ethnic", "Gothic", "Darkwave",
    "Techno-Industrial", "Electronic", "Pop-Folk", "Eurodance", "Dream",
    "Southern Rock", "Comedy", "Cult", "Gangsta", "Top 40", "Christian Rap",
    "Pop/Funk", "Jungle", "Native American", "Cabaret", "New Wave",
    "Psychedelic", "Rave", "Showtunes", "Trailer", "Lo-Fi", "Tribal",
    "Acid Punk", "Acid Jazz", "Polka", "Retro", "Musical", "Rock & Roll",
    "Hard Rock",
)

_SUPPORTED = (".mp3", ".wav")

_FRAME_IDS = {
    2: {"title": "TT2", "artist": "TP1", "album": "TAL", "genre": "TCO"},
    3: {"title": "TIT2", "artist": "TPE1", "album": "TALB", "genre": "TCON"},
    4: {"title": "TIT2", "artist": "TPE1", "album": "TALB", "genre": "TCON"},
}

_TEXT_ENCODINGS = {0: "latin-1", 1: "utf-16", 2: "utf-16-be", 3: "utf-8"}

_ID3V1_SLICES = {"title": (3, 33), "artist": (33, 63), "album": (63, 93)}

_BITRATES = {
    (True, 1): (32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448),
    (True, 2): (32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384),
    (True, 3): (32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320),
    (False, 1): (32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256),
    (False, 2): (8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160),
    (False, 3): (8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160),
}


@dataclass
class _Frame:
    ident: str
    flags: bytes
    payload: bytes


@dataclass
class _Id3v2:
    major: int
    frames: list[_Frame]
    end: int


class _FrameHeader(NamedTuple):
    version: int  # 1, 2, or 3 for MPEG 2.5
    layer: int
    bitrate: int  # kbit/s
    sample_rate: int
    mono: bool


def _from_synchsafe(raw: bytes) -> int:
    value = 0
    for byte in raw:
        value = (value << 7) | (byte & 0x7F)
    return value


def _to_synchsafe(value: int) -> bytes:
    if value >= 1 << 28:
        raise ValueError("tag too large")
    return bytes((value >> shift) & 0x7F for shift in (21, 14, 7, 0))


def _iter_frames(body: bytes, major: int):
    header_len, id_len = (6, 3) if major == 2 else (10, 4)
    pos = 0
    while pos + header_len <= len(body):
        ident = body[pos:pos + id_len]
        if not ident.isalnum():
            break
        if major == 2:
            size = int.from_bytes(body[pos + 3:pos + 6], "big")
            flags = b""
        elif major == 3:
            size = int.from_bytes(body[pos + 4:pos + 8], "big")
            flags = body[pos + 8:pos + 10]
        else:
            size = _from_synchsafe(body[pos + 4:pos + 8])
            flags = body[pos + 8:pos + 10]
        start = pos + header_len
        if start + size > len(body):
            break
        yield _Frame(ident.decode("latin-1"), flags, body[start:start + size])
        pos = start + size


def _parse_id3v2(data: bytes) -> _Id3v2 | None:
    if len(data) < 10 or data[:3] != b"ID3":
        return None
    major, flags = data[3], data[5]
    size = _from_synchsafe(data[6:10])
    end = 10 + size + (10 if major == 4 and flags & 0x10 else 0)
    if major not in _FRAME_IDS:
        return _Id3v2(major, [], min(end, len(data)))
    body = data[10:10 + size]
    if major < 4 and flags & 0x80:
        body = body.replace(b"\xff\x00", b"\xff")
    if major >= 3 and flags & 0x40 and len(body) >= 4:
        if major == 3:
            skip = 4 + int.from_bytes(body[:4], "big")
        else:
            skip = _from_synchsafe(body[:4])
        body = body[skip:]
    return _Id3v2(major, list(_iter_frames(body, major)), min(end, len(data)))


def _frame_body(frame: _Frame, major: int) -> bytes | None:
    payload = frame.payload
    if not frame.flags:
        return payload
    fmt = frame.flags[1]
    if major == 3:
        if fmt & 0xC0:
            return None
        if fmt & 0x20:
            payload = payload[1:]
    elif major == 4:
        if fmt & 0x0C:
            return None
        if fmt & 0x40:
            payload = payload[1:]
        if fmt & 0x01:
            payload = payload[4:]
        if fmt & 0x02:
            payload = payload.replace(b"\xff\x00", b"\xff")
    return payload


def _decode_text(body: bytes) -> str:
    if not body:
        return ""
    encoding = _TEXT_ENCODINGS.get(body[0])
    if encoding is None:
        return ""
    raw = body[1:]
    if body[0] in (1, 2) and len(raw) % 2:
        raw = raw[:-1]
    text = raw.decode(encoding, errors="replace")
    parts = [part.lstrip("\ufeff") for part in text.split("\x00")]
    return " ".join(part for part in parts if part)


def _encode_text(value: str) -> bytes:
    try:
        return b"\x00" + value.encode("latin-1")
    except UnicodeEncodeError:
        return b"\x01" + value.encode("utf-16")


def _resolve_genre(text: str) -> str:
    match = re.fullmatch(r"\((\d+)\)(.*)", text, re.S)
    if match:
        if match.group(2):
            return match.group(2)
        text = match.group(1)
    if text.isascii() and text.isdigit():
        index = int(text)
        return GENRES[index] if index < len(GENRES) else ""
    return text


def _id3v2_fields(tag: _Id3v2) -> dict[str, str]:
    if tag.major not in _FRAME_IDS:
        return {}
    by_id = {ident: name for name, ident in _FRAME_IDS[tag.major].items()}
    values: dict[str, str] = {}
    for frame in tag.frames:
        name = by_id.get(frame.ident)
        if name is None or name in values:
            continue
        body = _frame_body(frame, tag.major)
        if body is None:
            continue
        text = _decode_text(body)
        values[name] = _resolve_genre(text) if name == "genre" else text
    return values


def _id3v1_block(data: bytes) -> bytes | None:
    if len(data) >= 128 and data[-128:-125] == b"TAG":
        return data[-128:]
    return None


def _parse_id3v1(block: bytes) -> dict[str, str]:
    def text(start: int, stop: int) -> str:
        return block[start:stop].split(b"\x00", 1)[0].decode("latin-1").rstrip(" ")

    values = {name: text(*bounds) for name, bounds in _ID3V1_SLICES.items()}
    genre_index = block[127]
    values["genre"] = GENRES[genre_index] if genre_index < len(GENRES) else ""
    return values


def _build_id3v1(old: bytes | None, field: str, value: str) -> bytes:
    tag = bytearray(old) if old else bytearray(b"TAG" + bytes(124) + b"\xff")
    if field == "genre":
        tag[127] = GENRES.index(value) if value in GENRES else 255
    else:
        start, stop = _ID3V1_SLICES[field]
        encoded = value.encode("latin-1", errors="replace")[:stop - start]
        tag[start:stop] = encoded.ljust(stop - start, b"\x00")
    return bytes(tag)


def _build_id3v2(major: int, frames: list[_Frame]) -> bytes:
    if not frames:
        return b""
    parts = []
    for frame in frames:
        if major == 4:
            size = _to_synchsafe(len(frame.payload))
        else:
            size = len(frame.payload).to_bytes(4, "big")
        parts.append(frame.ident.encode("latin-1") + size + (frame.flags or b"\x00\x00") + frame.payload)
    body = b"".join(parts)
    return b"ID3" + bytes((major, 0, 0)) + _to_synchsafe(len(body)) + body


def _parse_frame_header(raw: bytes) -> _FrameHeader | None:
    if len(raw) < 4 or raw[0] != 0xFF or raw[1] & 0xE0 != 0xE0:
        return None
    version_bits = (raw[1] >> 3) & 3
    layer_bits = (raw[1] >> 1) & 3
    bitrate_index = raw[2] >> 4
    rate_index = (raw[2] >> 2) & 3
    if version_bits == 1 or layer_bits == 0 or bitrate_index in (0, 15) or rate_index == 3:
        return None
    version = {3: 1, 2: 2, 0: 3}[version_bits]
    layer = 4 - layer_bits
    bitrate = _BITRATES[(version == 1, layer)][bitrate_index - 1]
    sample_rate = (44100, 48000, 32000)[rate_index] >> (version - 1)
    return _FrameHeader(version, layer, bitrate, sample_rate, raw[3] >> 6 == 3)


def _mp3_length(data: bytes, start: int, end: int) -> int:
    pos = data.find(b"\xff", start)
    while 0 <= pos and pos + 4 <= end:
        header = _parse_frame_header(data[pos:pos + 4])
        if header:
            break
        pos = data.find(b"\xff", pos + 1)
    else:
        return 0

    if header.layer == 1:
        samples = 384
    elif header.layer == 2 or header.version == 1:
        samples = 1152
    else:
        samples = 576

    if header.version == 1:
        side_info = 17 if header.mono else 32
    else:
        side_info = 9 if header.mono else 17
    xing = pos + 4 + side_info
    if data[xing:xing + 4] in (b"Xing", b"Info"):
        flags = int.from_bytes(data[xing + 4:xing + 8], "big")
        if flags & 1:
            frames = int.from_bytes(data[xing + 8:xing + 12], "big")
            if frames:
                return int(frames * samples / header.sample_rate)
    vbri = pos + 36
    if data[vbri:vbri + 4] == b"VBRI":
        frames = int.from_bytes(data[vbri + 14:vbri + 18], "big")
        if frames:
            return int(frames * samples / header.sample_rate)
    return int((end - pos) * 8 / (header.bitrate * 1000))


def _wav_length(data: bytes) -> int:
    try:
        with wave.open(io.BytesIO(data), "rb") as reader:
            frames, rate = reader.getnframes(), reader.getframerate()
    except (wave.Error, EOFError):
        return 0
    return int(frames / rate) if rate else 0


def read_tags(path) -> dict[str, str | int] | None:
    """Read title, artist, album, genre and length (seconds) from an audio file.

    Returns None when the file cannot be opened or its type is not supported.
    """
    file_path = Path(os.fspath(path))
    suffix = file_path.suffix.lower()
    if suffix not in _SUPPORTED:
        return None
    try:
        data = file_path.read_bytes()
    except OSError:
        return None

    tags: dict[str, str | int] = dict.fromkeys(TAG_FIELDS, "")
    if suffix == ".wav":
        tags["length"] = _wav_length(data)
        return tags

    v2 = _parse_id3v2(data)
    v1 = _id3v1_block(data)
    if v1:
        tags.update(_parse_id3v1(v1))
    if v2:
        tags.update({name: value for name, value in _id3v2_fields(v2).items() if value})
    audio_start = v2.end if v2 else 0
    audio_end = len(data) - (128 if v1 else 0)
    tags["length"] = _mp3_length(data, audio_start, audio_end)
    return tags


def write_tag(path, field: str, value: str) -> bool:
    """Store one tag field in an MP3 file; an empty value removes it.

    Returns False when the file cannot be read, written, or tagged.
    """
    if field not in TAG_FIELDS:
        raise ValueError(f"unknown tag field: {field!r}")
    file_path = Path(os.fspath(path))
    if file_path.suffix.lower() != ".mp3":
        return False
    try:
        data = file_path.read_bytes()
    except OSError:
        return False

    v2 = _parse_id3v2(data)
    v1 = _id3v1_block(data)
    if v2 is not None and v2.major in (3, 4):
        major, old_frames = v2.major, v2.frames
    else:
        major, old_frames = 4, []

    frame_id = _FRAME_IDS[major][field]
    new_frame = _Frame(frame_id, b"\x00\x00", _encode_text(value)) if value else None
    frames: list[_Frame] = []
    placed = False
    for frame in old_frames:
        if frame.ident == frame_id:
            if new_frame and not placed:
                frames.append(new_frame)
                placed = True
            continue
        frames.append(frame)
    if new_frame and not placed:
        frames.append(new_frame)

    audio_start = v2.end if v2 else 0
    audio_end = len(data) - (128 if v1 else 0)
    output = _build_id3v2(major, frames) + data[audio_start:audio_end] + _build_id3v1(v1, field, value)
    try:
        file_path.write_bytes(output)
    except OSError:
        return False
    return True


@dataclass
class Metadata:
    """Tags and play length of one media file."""

    file_path: str = ""
    title: str = ""
    artist: str = ""
    album: str = ""
    genre: str = ""
    length: int = 0

    @classmethod
    def from_file(cls, path) -> Metadata:
        """Read the metadata of the file at path; unreadable files give empty tags."""
        file_path = os.fspath(path)
        tags = read_tags(file_path)
        if tags is None:
            return cls(file_path=file_path)
        return cls(file_path=file_path, **tags)

    def set_field(self, field: str, value: str) -> None:
        """Change one tag and save it to the file."""
        if field not in TAG_FIELDS:
            raise ValueError(f"unknown tag field: {field!r}")
        setattr(self, field, value)
        write_tag(self.file_path, field, value)

    def update(self, other: Metadata) -> None:
        """Apply the tags of other that differ, if it describes the same file."""
        if other.file_path != self.file_path:
            return
        for field in TAG_FIELDS:
            value = getattr(other, field)
            if value != getattr(self, field):
                self.set_field(field, value)