from quillblog.configs.settings import LimiterConfig, Settings, settings

__all__ = [
    "LimiterConfig",
    "Settings",
    "settings",
]
