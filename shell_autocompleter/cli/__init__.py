# interactive shell and command line entry point

from .cli import main

__all__ = ["main"]
