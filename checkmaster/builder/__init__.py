"""Template builder helpers."""
from checkmaster.builder.templates import (
    FIELD_LABELS,
    add_field,
    add_option,
    delete_template,
    move_field,
    new_field,
    remove_field,
    remove_option,
    save_template,
    update_field,
    update_option,
    upsert_template,
)

__all__ = [
    "FIELD_LABELS",
    "add_field",
    "add_option",
    "delete_template",
    "move_field",
    "new_field",
    "remove_field",
    "remove_option",
    "save_template",
    "update_field",
    "update_option",
    "upsert_template",
]
