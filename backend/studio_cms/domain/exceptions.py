"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class StoreWriteError(Exception):
    """Raised when the record store fails to persist a write."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Write to '{path}' failed: {message}")


class InvalidReorderError(Exception):
    """Raised when a reorder references an index outside the ordering domain."""

    def __init__(self, source_index: int, destination_index: int, size: int):
        self.source_index = source_index
        self.destination_index = destination_index
        self.size = size
        super().__init__(
            f"Cannot move index {source_index} to {destination_index} "
            f"in a domain of {size} record(s)"
        )


class ReorderFailedError(Exception):
    """Raised when renumbering writes could not all be persisted.

    ``written_keys`` lists the records whose new order did land before the
    failure; the store's next notification is the authoritative state.
    """

    def __init__(self, path: str, written_keys: list[str], cause: Exception):
        self.path = path
        self.written_keys = written_keys
        self.cause = cause
        super().__init__(
            f"Reorder of '{path}' failed after {len(written_keys)} write(s): {cause}"
        )


class InvalidFieldError(Exception):
    """Raised when an editor is asked to write a field outside its schema."""

    def __init__(self, section: str, field: str):
        self.section = section
        self.field = field
        super().__init__(f"Field '{field}' is not editable in {section}")


class ConfirmationRequiredError(Exception):
    """Raised when a destructive action is attempted without confirmation."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"{action} requires explicit confirmation")


class CredentialError(Exception):
    """Raised when the credential service rejects an operation.

    The message is deliberately generic; it never reveals whether the
    identifier exists.
    """

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed")


class CooldownActiveError(Exception):
    """Raised when a public submission arrives before the cooldown elapsed."""

    def __init__(self, kind: str, retry_after: float):
        self.kind = kind
        self.retry_after = retry_after
        super().__init__(f"Please wait a minute before submitting another {kind}.")


class NotificationError(Exception):
    """Raised by notification sinks; always caught before reaching a caller."""

    def __init__(self, sink: str, message: str):
        self.sink = sink
        self.message = message
        super().__init__(f"[{sink}] {message}")


class ActionNotAllowedError(Exception):
    """Raised when an editor does not offer the requested action."""

    def __init__(self, section: str, action: str):
        self.section = section
        self.action = action
        super().__init__(f"{section} does not support '{action}'")
