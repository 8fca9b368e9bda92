"""Column type helpers shared by the models."""

from enum import Enum

from sqlalchemy import Enum as SAEnum


def enum_column(enum_cls: type[Enum], name: str) -> SAEnum:
    """VARCHAR-backed enum storing member values, with a CHECK constraint.

    native_enum=False keeps migrations to plain ALTER COLUMN when a code is
    added (e.g. a new department).
    """
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=32,
        validate_strings=True,
        values_callable=lambda members: [m.value for m in members],
    )
