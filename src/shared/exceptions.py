"""Domain exceptions shared by every bounded context."""


class ValidationError(Exception):
    """Raised when an operation is given input it cannot accept.

    ``messages`` maps a field name to the list of user-facing messages for
    that field, e.g. ``{"quantity": ["Quantity must be at least 1"]}``.
    """

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)
