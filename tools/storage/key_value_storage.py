import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

from config.settings import ALARM_STORAGE_DIR, STORAGE_KEYS
from tools.storage.errors import PersistenceError
from util.loggin_mixin import LoggingMixin


class KeyValueStorage(LoggingMixin):
    """
    Simple string blob store: one file per key inside a directory.

    Writes go to a temporary file first and are moved into place with
    ``os.replace``, so a key is always either the old or the new value.
    """

    def __init__(self, directory: Union[str, Path] = ALARM_STORAGE_DIR):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        safe_name = key.lstrip("@").replace("/", "_") or "_"
        return self.directory / f"{safe_name}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"could not read '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                    tmp_file.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
        except OSError as e:
            raise PersistenceError(f"could not write '{key}': {e}") from e

        self.logger.debug("💾 '%s' gespeichert (%d Zeichen)", key, len(value))

    def remove_item(self, key: str) -> None:
        try:
            self._path_for(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise PersistenceError(f"could not remove '{key}': {e}") from e

    def multi_remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.remove_item(key)


def clear_all_data(storage: KeyValueStorage) -> None:
    """Entfernt Alarme, Einstellungen und Schlafdaten."""
    storage.multi_remove(STORAGE_KEYS.values())
    storage.logger.info("🗑️ Alle gespeicherten Daten gelöscht")
