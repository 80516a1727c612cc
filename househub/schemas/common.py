"""Validators shared by the partial-update schemas."""


def reject_null(v):
    """Fields backed by NOT NULL columns may be omitted from an update, but not set to null."""
    if v is None:
        raise ValueError("may not be null")
    return v
