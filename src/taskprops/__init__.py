"""Extract task properties from the command lines at the end of a task description."""

__version__ = "0.1.0"
