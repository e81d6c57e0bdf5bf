"""Aggregate application use cases."""

from .templates import (
    create_template,
    delete_template,
    get_template,
    list_templates,
    update_template,
)

__all__ = [
    "create_template",
    "delete_template",
    "get_template",
    "list_templates",
    "update_template",
]
