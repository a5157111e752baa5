from typing import Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(ServiceError):
    """Malformed input or missing required reference. Raised before any store write."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class StudentRequired(ValidationError):
    """Slot payload carries no student reference at all (distinct from StudentNotFound)."""

    def __init__(self) -> None:
        super().__init__("A student reference is required for a defense slot")


class NotFoundError(ServiceError):
    """Named lookup failure carrying what was looked for and the attempted id."""

    kind = "entity"

    def __init__(self, attempted_id: Optional[int], message: Optional[str] = None) -> None:
        self.attempted_id = attempted_id
        super().__init__(
            message or f"{self.kind.replace('_', ' ').capitalize()} not found for id = {attempted_id}",
            status.HTTP_404_NOT_FOUND,
        )


class PersonNotFound(NotFoundError):
    """Neither the direct id nor the owning-account id resolved to a person record."""

    def __init__(self, attempted_id: Optional[int], message: Optional[str] = None) -> None:
        super().__init__(
            attempted_id,
            message
            or f"{self.kind.capitalize()} not found for id = {attempted_id} "
            f"(tried {self.kind} id, then account id)",
        )

    @property
    def role(self) -> str:
        return self.kind


class StudentNotFound(PersonNotFound):
    kind = "student"


class ReviewerNotFound(PersonNotFound):
    kind = "reviewer"


class SessionNotFound(NotFoundError):
    kind = "defense_session"


class SlotNotFound(NotFoundError):
    kind = "defense_slot"


class DanglingReference(ServiceError):
    """The store rejected a direct reference (department, class group, academic year) at persist time."""

    def __init__(self, message: str = "Department, class group or academic year does not exist") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class NotFoundAfterInsert(ServiceError):
    """The row just written is not visible to the immediate reload."""

    def __init__(self, session_id: Optional[int]) -> None:
        self.session_id = session_id
        super().__init__(
            f"Defense session {session_id} not found after creation",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
