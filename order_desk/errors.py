"""
Error kinds raised by the order desk.

Validation errors are recovered by re-prompting; store errors are reported and
the operation abandoned; cancellation is a normal early exit from order entry.
"""


class ValidationError(ValueError):
    """A field value is out of range or malformed. Message is operator-facing."""


class CancelledByUser(Exception):
    """Operator typed the cancel keyword during order entry."""


class RecordStoreError(OSError):
    """The record store could not be opened, read or written."""


class RecordDecodeError(ValueError):
    """A stored slot does not decode to a well-formed order record."""
