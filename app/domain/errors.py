class DomainError(Exception):
    """Expected business error. `message` is safe to show to the end user."""

    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ProfileNotFound(DomainError):
    default_message = "Profile not found"


class ItemNotFound(DomainError):
    default_message = "Item not found"


class InsufficientBalance(DomainError):
    default_message = "Not enough points"

    def __init__(self, balance: int | None = None, required: int | None = None):
        self.balance = balance
        self.required = required
        msg = None
        if balance is not None and required is not None:
            msg = f"Not enough points: {required} required, {balance} available"
        super().__init__(msg)


class InvalidAmount(DomainError):
    default_message = "Amount must be a positive integer"


class DocumentNotFound(DomainError):
    default_message = "Document not found"


class InvalidStatusTransition(DomainError):
    default_message = "Document cannot change to that status"


class ThreadNotFound(DomainError):
    default_message = "Thread not found"


class ThreadLocked(DomainError):
    default_message = "Thread is locked"


class ReplyNotFound(DomainError):
    default_message = "Reply not found"


class NotThreadAuthor(DomainError):
    default_message = "Only the thread author can choose the best answer"


class NotificationNotFound(DomainError):
    default_message = "Notification not found"
