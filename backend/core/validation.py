from __future__ import annotations


class ValidationError(Exception):
    """Raised when domain validation fails."""


class EmptyBatchError(ValidationError):
    """Raised when an ingestion batch carries no files."""


class ColumnLayoutError(ValidationError):
    """Raised when the configured spreadsheet column roles are unusable."""


class SnapshotNotFoundError(LookupError):
    """Raised when no history entry exists for the requested date."""

    def __init__(self, date: str) -> None:
        super().__init__(f"no snapshot recorded for {date}")
        self.date = date


def validate_column_indices(roles: dict[str, int]) -> None:
    seen: dict[int, str] = {}
    for role, index in roles.items():
        if isinstance(index, bool) or not isinstance(index, int):
            raise ColumnLayoutError(f"column '{role}' must be an integer index, got {index!r}")
        if index < 0:
            raise ColumnLayoutError(f"column '{role}' must be non-negative, got {index}")
        if index in seen:
            raise ColumnLayoutError(f"columns '{seen[index]}' and '{role}' both point at index {index}")
        seen[index] = role
