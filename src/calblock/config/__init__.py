from .settings import APP_NAME, AppSettings, LoggingSettings, StorageSettings, get_settings

__all__ = ["APP_NAME", "AppSettings", "LoggingSettings", "StorageSettings", "get_settings"]
