"""todo-cli: a personal task tracker backed by a local SQLite file."""

__version__ = "1.0.0"
