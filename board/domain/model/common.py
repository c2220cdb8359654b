"""Base model for all domain entities."""

from typing import ClassVar, FrozenSet

from pydantic import BaseModel, ConfigDict, model_validator


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        use_enum_values=False,
    )


class Changes(BaseModel):
    """Base class for partial updates.

    Only fields the caller explicitly set are written. An explicit ``None``
    clears a column, which is only allowed for ``nullable_fields``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_cleared_required_fields(self) -> "Changes":
        for name in sorted(self.model_fields_set - self.nullable_fields):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def supplied(self) -> dict:
        """Return only the fields that were explicitly set."""
        return self.model_dump(mode="json", exclude_unset=True)


class Filter(BaseModel):
    """Base class for list/count filters.

    Each set field becomes an equality predicate; predicates are AND-ed.
    Fields are the allow-list, unknown fields are rejected. Fields named in
    ``flags`` are not column equalities and are applied by the repository.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    flags: ClassVar[FrozenSet[str]] = frozenset()

    def predicates(self) -> dict:
        """Return the equality predicates to apply."""
        return self.model_dump(mode="json", exclude_none=True, exclude=set(self.flags))
