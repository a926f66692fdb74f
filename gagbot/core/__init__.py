from .bot import GagBot
from .context import AppContext, MessageContext
from .dispatcher import CommandDispatcher, match_prefix, split_command
from .module_loader import ModuleLoader, ModuleMetadata
from .responses import error_embed, info_embed

__all__ = [
    "AppContext",
    "CommandDispatcher",
    "GagBot",
    "MessageContext",
    "ModuleLoader",
    "ModuleMetadata",
    "error_embed",
    "info_embed",
    "match_prefix",
    "split_command",
]
