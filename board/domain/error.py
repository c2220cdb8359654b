"""Domain layer errors.

Every reachable failure path in the core raises one of these. Storage-native
errors are translated by the persistence layer before they reach a service.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


# ============================================================================
# Constraint violations
# ============================================================================


class ConstraintViolation(DomainError):
    """A uniqueness or referential constraint was breached."""

    def __init__(self, message: str, table: str | None = None, detail: str = ""):
        self.table = table
        self.detail = detail
        super().__init__(message)


class UniqueViolation(ConstraintViolation):
    """Raised by repositories when a unique constraint is breached."""

    def mentions(self, column: str) -> bool:
        """Check whether the storage detail names ``column``."""
        return column.lower() in self.detail.lower()


class ForeignKeyViolation(ConstraintViolation):
    """Raised by repositories when a referenced row does not exist or is still referenced."""

    pass


class EmailTaken(ConstraintViolation):
    """Email is already registered to another user."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already exists: {email}", table="users")


class NicknameTaken(ConstraintViolation):
    """Nickname is already used by another user."""

    def __init__(self, nickname: str):
        self.nickname = nickname
        super().__init__(f"Nickname already exists: {nickname}", table="users")


class DuplicateCategoryName(ConstraintViolation):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Category already exists: {name}", table="categories")


class DuplicateTagName(ConstraintViolation):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag already exists: {name}", table="tags")


class AlreadyLiked(ConstraintViolation):
    """The user already likes this target."""

    def __init__(self, user_id: int, target_type: str, target_id: int):
        self.user_id = user_id
        self.target_type = target_type
        self.target_id = target_id
        super().__init__(
            f"User {user_id} already liked {target_type} {target_id}", table="likes"
        )


class CategoryInUse(ConstraintViolation):
    """Raised when deleting a category that posts still reference."""

    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(
            f"Category {category_id} is referenced by posts", table="categories"
        )


# ============================================================================
# Not found
# ============================================================================


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UserNotFound(NotFoundError):
    def __init__(self, user_id: int | str):
        super().__init__("User", str(user_id))


class PostNotFound(NotFoundError):
    def __init__(self, post_id: int):
        super().__init__("Post", str(post_id))


class CommentNotFound(NotFoundError):
    def __init__(self, comment_id: int):
        super().__init__("Comment", str(comment_id))


class CategoryNotFound(NotFoundError):
    def __init__(self, category_id: int | str):
        super().__init__("Category", str(category_id))


class TagNotFound(NotFoundError):
    def __init__(self, tag: int | str):
        super().__init__("Tag", str(tag))


class TargetNotFound(NotFoundError):
    """Like target (post or comment) does not exist."""

    def __init__(self, target_type: str, target_id: int):
        self.target_type = target_type
        super().__init__(target_type.capitalize(), str(target_id))


# ============================================================================
# Invalid state
# ============================================================================


class InvalidStateError(DomainError):
    """Operation is illegal given the current state of an entity."""

    pass


class InvalidParent(InvalidStateError):
    """Parent comment is missing, on another post, or itself a reply."""

    def __init__(self, parent_id: int, reason: str):
        self.parent_id = parent_id
        self.reason = reason
        super().__init__(f"Invalid parent comment {parent_id}: {reason}")


class UserInactive(InvalidStateError):
    """Writes on behalf of a suspended or deleted user are rejected."""

    def __init__(self, user_id: int, status: str):
        self.user_id = user_id
        self.status = status
        super().__init__(f"User {user_id} is {status} and cannot perform writes")


class InvalidStatusTransition(InvalidStateError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change user status from {current} to {target}")


# ============================================================================
# Authentication
# ============================================================================


class InvalidCredentials(DomainError):
    """Email/password pair did not match an active account."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidToken(DomainError):
    """Signed credential is malformed, tampered with, or expired."""

    pass


# ============================================================================
# Internal
# ============================================================================


class InternalError(DomainError):
    """Unexpected storage failure (connection loss, driver error)."""

    pass
