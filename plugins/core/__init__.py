from .commands import setup_basic_commands, setup_permission_commands, setup_prefix_commands
from .config import (
    LASTLOG_NODE,
    PERMISSION_LIST_NODE,
    PERMISSION_SET_NODE,
    PING_NODE,
    PREFIX_NODE,
    REPEAT_NODE,
    SQRT_NODE,
)

MODULE_METADATA = {
    "name": "Core",
    "version": "1.0.0",
    "author": "GaGBOT",
    "description": "Core commands: diagnostics, prefix and permission management",
    "dependencies": [],
    "permissions": [
        PING_NODE,
        REPEAT_NODE,
        SQRT_NODE,
        LASTLOG_NODE,
        PREFIX_NODE,
        PERMISSION_SET_NODE,
        PERMISSION_LIST_NODE,
    ],
}


def setup(app):
    return [
        *setup_basic_commands(app),
        *setup_prefix_commands(app),
        *setup_permission_commands(app),
    ]
