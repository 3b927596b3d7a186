"""Media files and playlists."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from tunedeck.metadata import Metadata


@dataclass
class MediaFile:
    """A file in the media library with its tags."""

    path: str = ""
    name: str = ""
    metadata: Metadata = field(default_factory=Metadata)

    @classmethod
    def from_path(cls, path) -> MediaFile:
        """Describe the file at path, reading its metadata."""
        file_path = os.fspath(path)
        return cls(
            path=file_path,
            name=file_path.rpartition("/")[2],
            metadata=Metadata.from_file(file_path),
        )

    def set_metadata(self, metadata: Metadata) -> None:
        """Apply changed tags from metadata describing this file."""
        self.metadata.update(metadata)

    def rename(self, new_name: str) -> None:
        """Rename the file on disk within its directory; raises OSError on failure."""
        directory, slash, _ = self.path.rpartition("/")
        new_path = directory + slash + new_name
        os.rename(self.path, new_path)
        self.path = new_path
        self.name = new_name
        self.metadata.file_path = new_path


@dataclass
class Playlist:
    """A named, ordered list of media files."""

    name: str = ""
    media: list[MediaFile] = field(default_factory=list)

    def add(self, media: MediaFile) -> None:
        """Append a media file."""
        self.media.append(media)

    def remove(self, index: int) -> None:
        """Remove the media file at a zero-based index."""
        if not 0 <= index < len(self.media):
            raise IndexError(f"no media file at index {index}")
        del self.media[index]