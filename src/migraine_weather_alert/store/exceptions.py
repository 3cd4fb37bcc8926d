class StoreError(Exception):
    pass


class ProfileNotFoundError(StoreError):
    pass


class PersistenceError(StoreError):
    def __init__(self, message: str = "Failed to persist record", status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
