"""Auto-installer for Gyoshu research assets in the OpenCode config directory."""

__version__ = "0.4.0"

# Export protocol interfaces for type hints and dependency injection
from gyoshu_installer.protocols import (
    EntryInstaller,
    FileSystem,
    HookFactory,
    StateRepository,
)

__all__ = [
    "__version__",
    "EntryInstaller",
    "FileSystem",
    "HookFactory",
    "StateRepository",
]
