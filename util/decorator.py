import copy
from functools import wraps
from typing import Any


def log_exceptions_from_self_logger(context: str = "", default: Any = None):
    """
    Decorator für Methoden, die `self.logger` enthalten.
    Holt sich den Logger zur Laufzeit aus dem Objekt und gibt bei einem
    Fehler eine Kopie von `default` zurück, statt die Exception weiterzureichen.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                self_instance = args[0]  # 'self' ist immer das erste Argument bei Methoden
                logger = getattr(self_instance, "logger", None)
                msg = f"Error {context}: {e}" if context else f"Error: {e}"
                if logger:
                    logger.error(f"❌ {msg}")
                else:
                    print(f"[WARNING] no logger found on self: {msg}")
                return copy.copy(default)

        return wrapper

    return decorator
