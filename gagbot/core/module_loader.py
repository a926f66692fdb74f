import importlib.util
import logging
import sys
from dataclasses import replace
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Optional

from ..commands import Command

logger = logging.getLogger(__name__)

CORE_MODULE = "core"


class ModuleMetadata:
    def __init__(
        self,
        name: str,
        version: str = "1.0.0",
        author: str = "Unknown",
        description: str = "",
        dependencies: Optional[List[str]] = None,
        permissions: Optional[List[str]] = None,
    ) -> None:
        self.name = name
        self.version = version
        self.author = author
        self.description = description
        self.dependencies = dependencies or []
        self.permissions = permissions or []


class ModuleLoader:
    """Imports command modules from disk and registers their commands."""

    def __init__(self, app: Any) -> None:
        self.app = app
        self.modules: Dict[str, ModuleType] = {}
        self.module_metadata: Dict[str, ModuleMetadata] = {}
        self.module_commands: Dict[str, List[str]] = {}
        self.module_directories: List[Path] = []

    def add_module_directory(self, directory: str | Path) -> None:
        path = Path(directory)
        if path.exists() and path.is_dir():
            self.module_directories.append(path)
            logger.info(f"Added module directory: {path}")
        else:
            logger.warning(f"Module directory does not exist: {path}")

    def discover_modules(self) -> List[str]:
        discovered = []

        for directory in self.module_directories:
            for module_path in sorted(directory.iterdir()):
                if module_path.is_dir() and not module_path.name.startswith("_"):
                    if (module_path / "__init__.py").exists():
                        discovered.append(module_path.name)

        logger.info(f"Discovered modules: {discovered}")
        return discovered

    def _import_module(self, module_name: str) -> ModuleType:
        for directory in self.module_directories:
            module_path = directory / module_name
            if (module_path / "__init__.py").exists():
                qualified_name = f"{directory.name}.{module_name}"
                spec = importlib.util.spec_from_file_location(qualified_name, module_path / "__init__.py")
                if spec and spec.loader:
                    module = importlib.util.module_from_spec(spec)
                    sys.modules[qualified_name] = module
                    try:
                        spec.loader.exec_module(module)
                    except Exception:
                        sys.modules.pop(qualified_name, None)
                        raise
                    return module

        raise ImportError(f"Module {module_name} not found")

    def _extract_metadata(self, module_name: str, module: ModuleType) -> ModuleMetadata:
        meta_dict = getattr(module, "MODULE_METADATA", None)
        if not meta_dict:
            return ModuleMetadata(name=module_name)

        return ModuleMetadata(
            name=meta_dict.get("name", module_name),
            version=meta_dict.get("version", "1.0.0"),
            author=meta_dict.get("author", "Unknown"),
            description=meta_dict.get("description", ""),
            dependencies=meta_dict.get("dependencies", []),
            permissions=meta_dict.get("permissions", []),
        )

    def _extract_commands(self, module: ModuleType) -> List[Command]:
        if hasattr(module, "setup"):
            commands = module.setup(self.app)
        else:
            commands = getattr(module, "COMMANDS", None)

        if commands is None:
            raise ValueError(f"Module {module.__name__} defines neither setup() nor COMMANDS")

        commands = list(commands)
        for command in commands:
            if not isinstance(command, Command):
                raise TypeError(f"Module {module.__name__} returned a non-command: {command!r}")
        return commands

    def load_module(self, module_name: str) -> bool:
        if module_name in self.modules:
            logger.info(f"Module {module_name} is already loaded")
            return True

        try:
            module = self._import_module(module_name)
            metadata = self._extract_metadata(module_name, module)

            for dep in metadata.dependencies:
                if dep not in self.modules:
                    logger.error(f"Module {module_name} requires {dep} which is not loaded")
                    return False

            commands = self._extract_commands(module)

        except Exception as e:
            logger.error(f"Failed to load module {module_name}: {e}")
            return False

        registered = []
        for command in commands:
            if command.name in self.app.commands:
                logger.warning(f"Skipping duplicate command {command.name} from module {module_name}")
                continue

            self.app.commands.add(replace(command, module_name=module_name))
            registered.append(command.name)
            logger.info(f"  + command {command.name}")

        self.modules[module_name] = module
        self.module_metadata[module_name] = metadata
        self.module_commands[module_name] = registered

        logger.info(f"Successfully loaded module: {module_name} v{metadata.version}")
        return True

    def load_all_modules(self, enabled_modules: List[str]) -> List[str]:
        """Load ``core`` and then every enabled module, returning those that failed."""
        failed = []
        for module_name in [CORE_MODULE, *(name for name in enabled_modules if name != CORE_MODULE)]:
            if not self.load_module(module_name):
                failed.append(module_name)
        return failed

    def get_loaded_modules(self) -> List[str]:
        return list(self.modules.keys())

    def get_module_info(self, module_name: str) -> Optional[ModuleMetadata]:
        return self.module_metadata.get(module_name)
