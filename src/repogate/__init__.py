"""repogate - sign in with GitHub and list your repositories."""

__version__ = "0.1.0"
