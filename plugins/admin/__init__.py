from .commands import setup_purge_commands
from .config import PURGE_NODE

MODULE_METADATA = {
    "name": "Admin",
    "version": "1.0.0",
    "author": "GaGBOT",
    "description": "Moderation commands for bulk message management",
    "dependencies": ["core"],
    "permissions": [PURGE_NODE],
}


def setup(app):
    return setup_purge_commands(app)
