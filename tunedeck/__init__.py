"""Terminal music player with a JSON library, playlists, tag editing and serial remote control."""

__version__ = "0.1.0"