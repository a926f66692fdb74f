from .purge import setup_purge_commands

__all__ = [
    "setup_purge_commands",
]
