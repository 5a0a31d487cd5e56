import logging
from pathlib import Path

import yaml

from kubex.exceptions import ConfigLoadError, PersistError
from kubex.models import KubeConfig

logger = logging.getLogger(__name__)


class KubeconfigStorage:
    """Reads and rewrites a kubeconfig file as a whole"""

    def __init__(self, storage_path: Path):
        self.storage_path = storage_path

    def load(self) -> KubeConfig:
        """Load the kubeconfig, raising ConfigLoadError if it is missing or malformed"""
        try:
            raw = yaml.safe_load(self.storage_path.read_bytes())
        except FileNotFoundError as e:
            raise ConfigLoadError(f"{self.storage_path}: no such file") from e
        except OSError as e:
            raise ConfigLoadError(f"{self.storage_path}: {e.strerror or e}") from e
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"{self.storage_path}: {e}") from e

        if raw is not None and not isinstance(raw, dict):
            raise ConfigLoadError(f"{self.storage_path}: expected a mapping at the top level")

        config = KubeConfig.from_dict(raw)
        logger.debug("Loaded kubeconfig %s (%d contexts, current=%r)",
                     self.storage_path, len(config.contexts), config.current_context)
        return config

    def save(self, config: KubeConfig):
        """Write the whole document back, keeping key order"""
        data = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
        try:
            self.storage_path.write_text(data, encoding="utf-8")
        except OSError as e:
            raise PersistError(self.storage_path, e) from e
        logger.debug("Wrote kubeconfig %s", self.storage_path)
