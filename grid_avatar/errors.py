"""Exception taxonomy for avatar generation.

Both errors are fatal: the rendering core performs no I/O besides reading the
font, so nothing inside it is worth retrying. Callers (the HTTP service, the
CLI) translate them into a user visible response.
"""


class AvatarError(Exception):
    """Base class for every error raised by ``grid_avatar``."""


class ConfigurationError(AvatarError, ValueError):
    """Invalid rendering parameters (side length, point size, palette size).

    Raised before any drawing happens.
    """


class ResourceError(AvatarError, OSError):
    """The font asset is missing or cannot be parsed. No fallback glyph is drawn."""
