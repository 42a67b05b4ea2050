"""Error types shared by the game store and the configuration manager."""


class LwgError(Exception):
    """Base class for all lwg errors."""
    pass


class NotFoundError(LwgError):
    """An expected file or directory does not exist."""
    pass


class NotDirectoryError(LwgError):
    """A path exists but is not a directory."""
    pass


class DecodeError(LwgError):
    """Serialized content could not be decoded."""
    pass


class StorageError(LwgError):
    """Creating, removing or writing a file or directory failed."""
    pass


class ConfigFileMissingError(LwgError):
    """The config directory exists but config.yaml does not."""
    pass


class ValidationError(LwgError):
    """Configuration validation errors."""
    pass
