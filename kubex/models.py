from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class KubeConfig:
    """Kubeconfig document kept as its raw mapping.

    Only ``current-context`` is ever written; every other key (clusters, users,
    preferences, extensions, ...) is carried through untouched.
    """
    raw: dict = field(default_factory=dict)

    @property
    def contexts(self) -> Dict[str, dict]:
        """Mapping of context name to its context data, in file order"""
        named = {}
        for entry in self.raw.get('contexts') or []:
            if isinstance(entry, dict) and entry.get('name'):
                named[str(entry['name'])] = entry.get('context') or {}
        return named

    @property
    def current_context(self) -> str:
        return self.raw.get('current-context') or ""

    @current_context.setter
    def current_context(self, name: str):
        self.raw['current-context'] = name

    def has_context(self, name: str) -> bool:
        return name in self.contexts

    def to_dict(self) -> dict:
        """Return the document for YAML serialization"""
        return self.raw

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        """Create a config from a parsed document (an empty file yields an empty config)"""
        return cls(raw=data if data is not None else {})


@dataclass
class AliasConfig:
    """Alias file model: alias name -> context name"""
    aliases: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert aliases to a dictionary for YAML serialization"""
        return {'aliases': dict(self.aliases)}

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        """Create an alias config from a parsed document (handles missing keys)"""
        data = data or {}
        return cls(aliases=dict(data.get('aliases') or {}))

    def resolve(self, name: str) -> str:
        """Return the context an alias points to, or the name itself"""
        return self.aliases.get(name, name)


@dataclass
class ContextEntry:
    """One line of `kubex list`"""
    name: str
    active: bool = False


@dataclass
class SwitchResult:
    """Outcome of a successful context switch"""
    requested: str
    context: str
    alias: Optional[str] = None
    previous: str = ""

    @property
    def via_alias(self) -> bool:
        return self.alias is not None


def sorted_entries(names: List[str], current: str) -> List[ContextEntry]:
    return [ContextEntry(name=n, active=(n == current)) for n in sorted(names)]
