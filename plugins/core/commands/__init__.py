from .basic import setup_basic_commands
from .permissions import setup_permission_commands
from .prefix import setup_prefix_commands

__all__ = [
    "setup_basic_commands",
    "setup_permission_commands",
    "setup_prefix_commands",
]
