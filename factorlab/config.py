import toml
import os

class AppConfig:
    """
    A centralized class to load and provide configuration from the package TOML file.
    """
    _settings = None

    @staticmethod
    def _load():
        """
        Loads 'config.toml' from the package directory.

        It caches the result after the first read to avoid redundant file I/O.
        """
        if AppConfig._settings is None:
            config_path = os.path.join(os.path.dirname(__file__), 'config.toml')
            try:
                with open(config_path, 'r') as f:
                    AppConfig._settings = toml.load(f)
                print(f"--- Loaded {len(AppConfig._settings.get('prototypes', []))} level prototypes from TOML file. ---")

            except FileNotFoundError:
                print(f"CRITICAL ERROR: 'config.toml' not found at '{config_path}'. Using empty settings.")
                AppConfig._settings = {}
            except toml.TomlDecodeError as e:
                print(f"CRITICAL ERROR: Failed to parse 'config.toml'. Error: {e}")
                AppConfig._settings = {}

        return AppConfig._settings

    @staticmethod
    def reload():
        """Drops the cached settings so the next access re-reads the file."""
        AppConfig._settings = None

    @staticmethod
    def get_level_prototypes():
        return AppConfig._load().get("prototypes", [])

    @staticmethod
    def get_prototype(name: str) -> dict:
        """Returns the prototype with the given name, e.g. 'likert_5_point'."""
        for prototype in AppConfig.get_level_prototypes():
            if prototype.get('name') == name:
                return prototype
        raise ValueError(f"Level prototype '{name}' not found in config.toml.")

    @staticmethod
    def get_sample_settings() -> dict:
        return AppConfig._load().get("sample", {})

    @staticmethod
    def get_missing_label() -> str:
        return AppConfig._load().get("display", {}).get("missing_label", "<NA>")
