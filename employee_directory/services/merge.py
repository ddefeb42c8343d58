"""
Partial-update merge shared by the entity services.

Only fields explicitly present in the update model (non-None) overwrite the
existing record; every other field keeps its previous value.
"""

from typing import Any, Dict, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def present_fields(update: BaseModel) -> Dict[str, Any]:
    """Attribute name → value for every field of `update` that was supplied."""
    return {
        name: getattr(update, name)
        for name in type(update).model_fields
        if getattr(update, name) is not None
    }


def apply_partial_update(existing: ModelT, update: BaseModel) -> ModelT:
    """Return a new copy of `existing` with the supplied fields of `update` applied."""
    changes = present_fields(update)
    unknown = set(changes) - set(type(existing).model_fields)
    if unknown:
        raise ValueError(
            f"{type(update).__name__} has fields {sorted(unknown)} "
            f"that {type(existing).__name__} does not"
        )
    return existing.model_copy(update=changes, deep=True)
