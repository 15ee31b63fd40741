"""Package version; kept in step with ``project.version`` in pyproject.toml."""

__version__ = "0.1.0"
