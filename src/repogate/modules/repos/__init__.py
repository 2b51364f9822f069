"""Repository listing module."""

from repogate.modules.repos.routes import router


__all__ = ["router"]
