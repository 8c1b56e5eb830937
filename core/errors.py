class DataError(Exception):
    """Generic data-access failure raised by the task store.

    Wraps driver errors, missing rows and constraint violations so callers only
    need to handle one exception type.
    """

    def __init__(self, operation: str, message: str = ""):
        self.operation = operation
        self.message = message or operation
        super().__init__(f"{operation}: {self.message}" if message else operation)
