import json
import os
from pathlib import Path
from typing import Any

import importlib.util
import importlib.machinery

__all__ = [
    'Dynamic'
]

class GenericEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, (set, frozenset, tuple)):
            return list(o)

        return super().default(o)

class Dynamic(dict):
    def __getattr__(self, name: str) -> Any:
        if name in self:
            val = self[name]
            if isinstance(val, dict) and not isinstance(val, Dynamic):
                val = Dynamic(val)
            return val
        else:
            raise AttributeError(name)

    def __setattr__(self, name: str, value: Any):
        self[name] = value

    def contains(self, *keys: str) -> bool:
        return all(self.get(key) is not None for key in keys)

    def contains_path(self, *path: str) -> bool:
        cur = self
        for sect in path:
            if not isinstance(cur, dict):
                return False
            cur = cur.get(sect)
            if cur is None:
                return False

        return True

    def get_path(self, *path: str, default: Any = None) -> Any:
        cur = self
        for sect in path:
            if not isinstance(cur, dict):
                return default
            cur = cur.get(sect)
            if cur is None:
                return default

        return cur

    def get_dotted(self, key: str | None, default: Any = None) -> Any:
        """
        Looks up `key` as a dot separated path (`'a.b.c'`).
        A key that exists verbatim wins over the nested lookup, a `None` key
        returns the whole mapping.
        """

        if key is None:
            return self

        if key in self:
            return self[key]

        return self.get_path(*key.split('.'), default=default)

    def to_json(self) -> str:
        return json.dumps(self, separators=(',', ':'), cls=GenericEncoder)

    @classmethod
    def from_module(cls, filename: str | os.PathLike) -> Any:
        module_name = '_formbuilder_config.' + Path(filename).name.split('.')[0]
        loader = importlib.machinery.SourceFileLoader(module_name, str(filename))
        spec = importlib.util.spec_from_loader(module_name, loader)
        module = importlib.util.module_from_spec(spec)
        loader.exec_module(module)

        return cls((k, getattr(module, k)) for k in dir(module) if not k.startswith('_'))

    @classmethod
    def from_json(cls, json_string: str | bytes | None) -> Any:
        if json_string is None:
            return cls()

        return json.loads(json_string, object_hook=cls)

    @classmethod
    def from_file(cls, filename: str | os.PathLike) -> Any:
        with open(filename) as json_file:
            s = json.load(json_file, object_hook=cls)

        if not isinstance(s, cls):
            raise ValueError('json file is not an object')

        return s
