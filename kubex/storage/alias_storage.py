import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from kubex.exceptions import AliasNotFound, ParseError, PersistError
from kubex.models import AliasConfig
from kubex.utils.utils import alias_file_path

logger = logging.getLogger(__name__)


class AliasStorage:
    """YAML-based storage for context aliases"""

    def __init__(self, storage_path: Path = None):
        """Initialize storage with default or custom path"""
        self.storage_path = storage_path or alias_file_path()

    def _read_data(self) -> Optional[dict]:
        """Read the raw document; None when the file does not exist yet"""
        if not self.storage_path.exists():
            return None
        try:
            raw = yaml.safe_load(self.storage_path.read_bytes())
        except yaml.YAMLError as e:
            raise ParseError(f"{self.storage_path}: {e}") from e
        except OSError as e:
            raise ParseError(f"{self.storage_path}: {e.strerror or e}") from e

        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise ParseError(f"{self.storage_path}: expected a mapping at the top level")
        aliases = raw.get('aliases')
        if aliases is not None:
            if not isinstance(aliases, dict):
                raise ParseError(f"{self.storage_path}: 'aliases' must be a mapping")
            for key, value in aliases.items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise ParseError(
                        f"{self.storage_path}: alias {key!r} must map a name to a context name")
        return raw

    def _write_data(self, data: dict):
        """Write raw data to storage, creating the parent directory"""
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            self.storage_path.write_text(yaml.safe_dump(data, default_flow_style=False), encoding="utf-8")
        except OSError as e:
            raise PersistError(self.storage_path, e) from e

    def load(self) -> AliasConfig:
        """Load all aliases (empty when the file is missing)"""
        config = AliasConfig.from_dict(self._read_data())
        logger.debug("Loaded %d aliases from %s", len(config.aliases), self.storage_path)
        return config

    def save(self, config: AliasConfig):
        """Overwrite the alias file with the full mapping"""
        self._write_data(config.to_dict())
        logger.debug("Saved %d aliases to %s", len(config.aliases), self.storage_path)

    def aliases(self) -> Dict[str, str]:
        return self.load().aliases

    def get(self, alias: str) -> Optional[str]:
        """Get the context an alias points to"""
        return self.load().aliases.get(alias)

    def exists(self, alias: str) -> bool:
        return alias in self.load().aliases

    def add(self, alias: str, context: str) -> AliasConfig:
        """Add or overwrite an alias and persist it"""
        config = self.load()
        config.aliases[alias] = context
        self.save(config)
        return config

    def remove(self, alias: str) -> AliasConfig:
        """Remove an alias, raising AliasNotFound if it is not defined"""
        config = self.load()
        if alias not in config.aliases:
            raise AliasNotFound(alias)
        del config.aliases[alias]
        self.save(config)
        return config
