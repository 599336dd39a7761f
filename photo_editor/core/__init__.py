"""Core services for the photo editor."""
from .commands import AsyncCommandController, describe_failure
from .config import EditorSettings, ErrorMessages
from .errors import EditorError, FilterNotFoundError, ImageDecodeError
from .logging_config import LoggingConfigurator, LoggingOptions
from .settings_manager import SettingsManager
from .state import ObservableSlot, OperationState, Subscription
from .threading import ThreadController

__all__ = [
    "AsyncCommandController",
    "describe_failure",
    "EditorError",
    "EditorSettings",
    "ErrorMessages",
    "FilterNotFoundError",
    "ImageDecodeError",
    "LoggingConfigurator",
    "LoggingOptions",
    "ObservableSlot",
    "OperationState",
    "SettingsManager",
    "Subscription",
    "ThreadController",
]
