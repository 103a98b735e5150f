"""Task management service: tasks scoped by company and group, kept in sync with asset and resource entries."""

__version__ = "1.0.0"
