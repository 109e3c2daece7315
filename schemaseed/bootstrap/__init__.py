"""Container bootstrap: runs a database container seeded with the compiled schema."""

from schemaseed.validation import SchemaseedError


class BootstrapError(SchemaseedError):
    """Raised when a bootstrap step (container runtime, ports, credentials) fails."""

    pass


__all__ = ["BootstrapError", "BootstrapResult", "bootstrap"]


def __getattr__(name):
    """Lazy import the workflow so submodules can import BootstrapError."""
    if name in ("BootstrapResult", "bootstrap"):
        from schemaseed.bootstrap import workflow

        return getattr(workflow, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
