"""Utility functions and helpers."""

from .helpers import (
    async_to_sync,
    ordered_group,
)
from .menu import (
    multi_select_menu,
    select_menu,
)
from .output import (
    confirm,
    console,
    get_status_color,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    print_warning,
    prompt,
)

__all__ = [
    "async_to_sync",
    "confirm",
    "console",
    "get_status_color",
    "multi_select_menu",
    "ordered_group",
    "print_cancelled",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "prompt",
    "select_menu",
]
