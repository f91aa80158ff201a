from typing import Dict, Optional

from .types import Object


class Environment:
    """A scope mapping identifiers to values, chained to its enclosing scope.

    Function calls get a fresh environment whose parent is the environment
    the function was defined in, not the caller's, so lookups follow the
    lexical nesting of the source. Closures keep their defining environment
    alive simply by holding a reference to it.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Object] = {}

    def enclosed(self) -> 'Environment':
        return Environment(parent=self)

    def get(self, name: str) -> Optional[Object]:
        if name in self.values:
            return self.values[name]
        if self.parent is not None:
            return self.parent.get(name)
        return None

    def set(self, name: str, value: Object) -> Object:
        # bindings always land in this scope and shadow any outer ones
        self.values[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None
