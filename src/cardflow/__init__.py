"""cardflow - Terminal Kanban board for very large boards."""

__version__ = "0.1.0"
