class KubexError(Exception):
    """Base class for all kubex errors"""


class ConfigLoadError(KubexError):
    """The kubeconfig could not be located or loaded"""


class ParseError(KubexError):
    """The alias file is not valid"""


class ContextNotFound(KubexError):
    def __init__(self, name: str):
        super().__init__(f"Context '{name}' not found.")
        self.name = name


class AliasNotFound(KubexError):
    def __init__(self, alias: str):
        super().__init__(f"Alias '{alias}' not found.")
        self.alias = alias


class PersistError(KubexError):
    """Writing a file back to disk failed"""

    def __init__(self, path, cause: OSError):
        super().__init__(f"{path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause
