from __future__ import annotations


class StickerError(Exception):
    """Base class for every failure raised while composing a sticker."""


class InvalidRequest(StickerError, ValueError):
    """A request field failed validation before rendering started."""


class InvalidColorFormat(InvalidRequest):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid hex color: {value!r}")
        self.value = value


class EncodingFailure(StickerError, RuntimeError):
    """The finished canvas could not be serialized to PNG."""
