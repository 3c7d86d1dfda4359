from .musicxml import MusicXmlRenderer  # noqa: F401
