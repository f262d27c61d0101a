from sqlalchemy import Enum

from applyflow.core.statuses import enum_values


def status_column_type(enum_cls, name):
    """VARCHAR-backed enum column that stores member values, not member names."""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=False,
        length=32,
        values_callable=enum_values,
        validate_strings=True,
    )
