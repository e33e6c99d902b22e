from .settings import ENV_CONFIG_DIR, SIZE_PRESETS, GameSettings, SettingsStore, default_settings_path

__all__ = [
    "ENV_CONFIG_DIR",
    "GameSettings",
    "SIZE_PRESETS",
    "SettingsStore",
    "default_settings_path",
]
