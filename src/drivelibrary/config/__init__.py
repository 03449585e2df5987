from .settings import DriveType, Settings, get_settings, reset_settings

__all__ = ["DriveType", "Settings", "get_settings", "reset_settings"]
