from pathlib import Path
import yaml
from typing import Any, Optional, Dict


class YmlHandler:
    """
    YAML-backed application preset.

    Keys are upper case (``NAME``, ``STATE_FILE``, ``AUTOLOAD``, ``AUTOSAVE``,
    ``LOG_DIR``). A missing file behaves like an empty preset.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize handler with YAML file path.

        Args:
            path: Path to YAML file.

        Raises:
            ValueError: The file doesn't hold a YAML mapping.
        """
        self.path: Path = path
        self.state: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            state = yaml.safe_load(f) or {}
        if not isinstance(state, dict):
            raise ValueError(f"Preset {self.path} must be a YAML mapping")
        return state

    def save(self) -> None:
        """Persist current state back to YAML file."""
        with self.path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.state, f, default_flow_style=False)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.state.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """
        Get a flag, accepting YAML booleans and the strings yes/no/true/false.

        Args:
            key: Key to retrieve.
            default: Value used when the key is missing or unrecognised.

        Returns:
            bool: Flag value.
        """
        value = self.state.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("yes", "true", "on", "1"):
                return True
            if lowered in ("no", "false", "off", "0"):
                return False
        return default

    def get_path(self, key: str, default: Path) -> Path:
        """
        Get a path, relative paths being resolved against the preset's folder.

        Args:
            key: Key to retrieve.
            default: Path used when the key is missing or empty.

        Returns:
            Path: Resolved path.
        """
        value = self.state.get(key)
        path = Path(str(value).strip()) if value else default
        if not path.is_absolute():
            path = self.path.parent / path
        return path

    def set(self, key: str, value: Any) -> None:
        """
        Set a value in the state and save to file.

        Args:
            key: Key to set.
            value: Value to store.
        """
        self.state[key] = value
        self.save()
