import logging
from typing import Callable, List

from kubex.exceptions import ContextNotFound, ParseError
from kubex.models import ContextEntry, KubeConfig, SwitchResult, sorted_entries
from kubex.storage.alias_storage import AliasStorage
from kubex.storage.kubeconfig_storage import KubeconfigStorage

logger = logging.getLogger(__name__)


class ContextSwitcher:
    """Alias-aware context operations on one loaded kubeconfig"""

    def __init__(self, config: KubeConfig, kubeconfig_storage: KubeconfigStorage,
                 alias_storage: AliasStorage):
        self.config = config
        self.kubeconfig_storage = kubeconfig_storage
        self.alias_storage = alias_storage

    def resolve(self, name_or_alias: str) -> str:
        """Map an alias to its context; any other name is returned as is"""
        resolved = self.alias_storage.load().resolve(name_or_alias)
        if resolved != name_or_alias:
            logger.debug("Alias %r resolves to context %r", name_or_alias, resolved)
        return resolved

    def switch(self, name_or_alias: str) -> SwitchResult:
        """Make a context (or the target of an alias) current and persist the kubeconfig.

        Raises ParseError if the alias file is malformed, ContextNotFound if the
        resolved name is not in the kubeconfig, and PersistError if the rewrite
        fails. On ContextNotFound the config is left untouched.
        """
        context = self.resolve(name_or_alias)
        if not self.config.has_context(context):
            raise ContextNotFound(context)

        previous = self.config.current_context
        self.config.current_context = context
        self.kubeconfig_storage.save(self.config)
        logger.debug("Switched current context %r -> %r", previous, context)

        return SwitchResult(
            requested=name_or_alias,
            context=context,
            alias=name_or_alias if context != name_or_alias else None,
            previous=previous,
        )

    def list_contexts(self) -> List[ContextEntry]:
        return sorted_entries(list(self.config.contexts), self.config.current_context)

    def current_context(self) -> str:
        return self.config.current_context

    def completion_candidates(self, prefix: str = "") -> List[str]:
        """Context and alias names starting with prefix, for shell completion"""
        names = list(self.config.contexts)
        try:
            names.extend(self.alias_storage.load().aliases)
        except ParseError as e:
            logger.debug("Ignoring aliases for completion: %s", e)
        seen = dict.fromkeys(n for n in names if n.startswith(prefix))
        return list(seen)


def add_alias(alias_storage: AliasStorage, alias: str, context: str,
              confirm: Callable[[str], bool]) -> bool:
    """Create or overwrite an alias, asking confirm() before replacing an existing one.

    Returns False when the overwrite was declined; the store is then unchanged.
    """
    existing = alias_storage.get(alias)
    if existing is not None and not confirm(f"Alias '{alias}' already exists. Overwrite?"):
        logger.debug("Kept alias %r -> %r", alias, existing)
        return False
    alias_storage.add(alias, context)
    return True
