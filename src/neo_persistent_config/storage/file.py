"""File storage keeping config values in a local Python source file.

The file holds a single ``VALUES = {...}`` mapping literal, regenerated as a
whole on every write. It is read back with ``ast.literal_eval`` and never
executed.

This storage provides good performance, but is not suitable for distributed
deployments with several application instances behind a load balancer.
"""

import ast
import importlib
import importlib.util
import linecache
import logging
import os
import pprint
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Union

from ..core.exceptions import StorageError
from ..entities.protocols import Scalar

logger = logging.getLogger(__name__)

VALUES_NAME = "VALUES"

FILE_HEADER = "# Generated by neo-persistent-config. Do not edit manually.\n\n"


class FileStorage:
    """Storage contract implementation over a Python literal file."""

    def __init__(self, file_name: Union[str, Path]):
        self.file_name = Path(file_name)

    def save(self, values: Mapping[str, Scalar]) -> bool:
        merged = self.get()
        merged.update(values)
        return self._write(merged)

    def get(self) -> Dict[str, Scalar]:
        if not self.file_name.exists():
            return {}

        try:
            source = self.file_name.read_text(encoding="utf-8")
            tree = ast.parse(source, filename=str(self.file_name))
        except (OSError, SyntaxError, ValueError) as e:
            raise StorageError(f"Unable to read config file {self.file_name}: {e}")

        for node in tree.body:
            if (
                isinstance(node, ast.Assign)
                and len(node.targets) == 1
                and isinstance(node.targets[0], ast.Name)
                and node.targets[0].id == VALUES_NAME
            ):
                try:
                    values = ast.literal_eval(node.value)
                except ValueError as e:
                    raise StorageError(f"Config file {self.file_name} holds non literal values: {e}")
                if not isinstance(values, dict):
                    raise StorageError(f"Config file {self.file_name} must define a mapping")
                return values

        return {}

    def clear(self) -> bool:
        if self.file_name.exists():
            try:
                self.file_name.unlink()
            except OSError as e:
                raise StorageError(f"Unable to delete config file {self.file_name}: {e}")
            self.invalidate_script_cache()
        return True

    def clear_value(self, key: str) -> bool:
        values = self.get()
        if not values:
            return True

        values.pop(key, None)
        return self._write(values)

    def compose_file_content(self, values: Mapping[str, Scalar]) -> str:
        """Compose file content for the given values."""
        return f"{FILE_HEADER}{VALUES_NAME} = {pprint.pformat(dict(values), sort_dicts=False)}\n"

    def invalidate_script_cache(self) -> None:
        """Drop compiled bytecode and line caches held for the storage file."""
        try:
            cached = importlib.util.cache_from_source(str(self.file_name))
        except (NotImplementedError, ValueError):
            cached = None

        if cached and os.path.exists(cached):
            try:
                os.remove(cached)
            except OSError as e:
                logger.warning(f"Unable to remove compiled cache {cached}: {e}")

        linecache.checkcache(str(self.file_name))
        importlib.invalidate_caches()

    def _write(self, values: Mapping[str, Scalar]) -> bool:
        content = self.compose_file_content(values)
        directory = self.file_name.parent

        try:
            directory.mkdir(mode=0o755, parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(dir=directory, prefix=f".{self.file_name.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(temp_name, self.file_name)
        except OSError as e:
            raise StorageError(f"Unable to write config file {self.file_name}: {e}")

        self.invalidate_script_cache()
        logger.debug(f"Wrote {len(values)} config values to {self.file_name}")
        return True
