class StoreError(Exception):
    pass


class CodeConflictError(StoreError):
    """Raised when a code value collides with the store's uniqueness constraint."""


class StoreUnavailableError(StoreError):
    pass
