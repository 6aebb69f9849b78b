"""Exception hierarchy shared by all layers"""


class Repo2FileError(Exception):
    """Base error for a failed run."""

    pass


class ConfigurationError(Repo2FileError):
    """Bad argument combination, malformed pattern or invalid config file."""

    pass


class FilterConflictError(ConfigurationError):
    """--include-files combined with --ignore-files or --ignore-dirs."""

    pass


class AcquisitionError(Repo2FileError):
    """Remote repository could not be cloned."""

    pass


class OutputError(Repo2FileError):
    """Output file could not be created or written."""

    pass


class FileReadError(Repo2FileError):
    """A file selected for output could not be read as text."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {path}: {cause}")
