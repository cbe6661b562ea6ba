import os

_MODULES = {
    "dev": "config.development",
    "development": "config.development",
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    """Dotted path of the settings module for this process.

    SETTINGS_MODULE wins when set (e.g. a deployment-specific module);
    otherwise APP_ENV picks one of the bundled modules, defaulting to
    development.
    """

    explicit = os.getenv("SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _MODULES.get(env, "config.development")
