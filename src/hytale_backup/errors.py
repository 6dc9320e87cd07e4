"""Exception types raised by the path resolver and the archive engine.

Every error carries a human-readable message, built where the failure
happened, that the UI can show verbatim.
"""


class PlatformError(Exception):
    """Raised when the Hytale saves folder cannot be located"""
    pass


class EnvironmentVariableMissing(PlatformError):
    """A required environment variable (e.g. APPDATA) is not set"""

    def __init__(self, variable: str):
        super().__init__(f"Environment variable {variable} is not set")
        self.variable = variable


class HomeDirectoryUnavailable(PlatformError):
    """The user's home directory could not be determined"""

    def __init__(self, reason: str = ""):
        message = "Could not determine the home directory"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedPlatform(PlatformError):
    """No saves folder mapping exists for this operating system"""

    def __init__(self, system: str):
        super().__init__(f"Platform not supported: {system or 'unknown'}")
        self.system = system


class ArchiveError(Exception):
    """Raised for any failure while writing or reading a world archive"""
    pass


class WorldNotFoundError(ArchiveError):
    """The world directory to back up does not exist"""

    def __init__(self, world_name: str):
        super().__init__(f"World '{world_name}' not found")
        self.world_name = world_name


class WorldImportError(ArchiveError):
    """Raised when an archive cannot be imported into the saves folder"""
    pass


class TransferBusyError(Exception):
    """Raised when a transfer is requested while another one is running"""

    def __init__(self):
        super().__init__("A backup is already in progress")
