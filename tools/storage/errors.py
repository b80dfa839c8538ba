class PersistenceError(Exception):
    """Raised when the durable storage cannot be read or written."""
