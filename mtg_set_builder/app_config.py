import configparser
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_FILE = Path(__file__).resolve().parent / "config" / "default.settings.ini"

DEFAULTS: Dict[str, Dict[str, str]] = {
    "Logging": {
        "log_level": "INFO",
        "log_to_file": "False",
    },
    "Matching": {
        "case_sensitive": "False",
    },
    "Paths": {
        "sets_dir": "sets",
    },
}


class AppConfig:
    """
    Application configuration read from an INI file.

    Built-in defaults are loaded first; values from ``path`` override them.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, base_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Args:
            path: INI file to read. Defaults only when None.
            base_dir: Directory that relative [Paths] entries resolve against.
                Defaults to the INI file's directory, or the project root.

        Raises:
            FileNotFoundError: If ``path`` is given and does not exist.
        """
        self.config: configparser.ConfigParser = configparser.ConfigParser()
        self.config.read_dict(DEFAULTS)
        self.config_file: Optional[Path] = None

        if path is not None:
            self.config_file = Path(path)
            if not self.config_file.is_file():
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            self.config.read(self.config_file, encoding="utf-8")

        if base_dir is not None:
            self.base_dir = Path(base_dir)
        elif self.config_file is not None:
            self.base_dir = self.config_file.resolve().parent
        else:
            self.base_dir = PROJECT_ROOT

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a string value from the configuration.

        Args:
            section: Section name in config.
            key: Setting name.
            fallback: Default value if setting doesn't exist.

        Returns:
            The setting value or fallback.
        """
        return self.config.get(section, key, fallback=fallback)

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        return self.config.getboolean(section, key, fallback=fallback)

    def get_int(self, section: str, key: str, fallback: int = 0) -> int:
        return self.config.getint(section, key, fallback=fallback)

    def get_list(self, section: str, key: str, fallback: Optional[List[str]] = None) -> List[str]:
        """
        Get a list of strings from a comma-separated value in the configuration.

        Returns:
            A list of strings, or ``fallback`` (empty list) if the setting doesn't exist.
        """
        value = self.get(section, key)
        if value is None:
            return fallback or []
        return [item.strip() for item in value.split(",") if item.strip()]

    def get_path(self, key: str) -> Path:
        """
        Get a path from the [Paths] section, resolved against ``base_dir``.

        Raises:
            KeyError: If the key is missing or empty.
        """
        relative_path_str = self.config.get("Paths", key, fallback="")
        if not relative_path_str:
            raise KeyError(f"Path key '{key}' not found or is empty in the [Paths] section.")
        return (self.base_dir / relative_path_str).resolve()

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a value in memory. Call save() to persist it."""
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, key, str(value))

    def save(self, path: Optional[Union[str, Path]] = None) -> None:
        """
        Write the configuration to ``path`` or the file it was read from.

        Raises:
            ValueError: If there is nowhere to write to.
        """
        target = Path(path) if path is not None else self.config_file
        if target is None:
            raise ValueError("No configuration file to save to")
        with open(target, "w", encoding="utf-8") as f:
            self.config.write(f)
        self.config_file = target

    @property
    def case_sensitive(self) -> bool:
        return self.get_bool("Matching", "case_sensitive", False)

    @property
    def log_level(self) -> str:
        return self.get("Logging", "log_level", "INFO") or "INFO"

    @classmethod
    def from_default_file(cls) -> "AppConfig":
        """Load the packaged default settings file."""
        return cls(DEFAULT_CONFIG_FILE, base_dir=PROJECT_ROOT)
