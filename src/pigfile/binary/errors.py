from __future__ import annotations


class FormatError(ValueError):
    pass


class Truncated(FormatError):
    """A read ran past the bytes available for the directory or a payload."""


class InvalidDirectory(FormatError):
    """Header counts or offsets describe an archive that cannot exist."""


class UnsupportedLayout(FormatError):
    """An asset's payload does not match any layout the decoders understand."""


class PaletteUnavailable(FormatError):
    pass
