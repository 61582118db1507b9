"""Utility modules for filedb.

This module exports commonly used utility functions.
"""

from filedb.utils.formatting import (
    console,
    create_item_table,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_item_table",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
