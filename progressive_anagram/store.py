from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "mpad"


class KeyValueStore:
    """
    Flat JSON key-value store backed by a single file.

    Keys are namespaced as "<namespace>.<key>" so several apps can share a file.
    Values are any JSON-serializable object.
    """

    def __init__(self, path: Union[str, Path], *, namespace: str = DEFAULT_NAMESPACE) -> None:
        if not namespace or "." in namespace:
            raise ValueError("namespace must be a non-empty string without dots.")
        self.path = Path(path)
        self.namespace = namespace

    def load(self, key: str, defaults: Any = None) -> Any:
        data = self._read()
        return data.get(self._full_key(key), defaults)

    def save(self, key: str, value: Any) -> None:
        data = self._read()
        data[self._full_key(key)] = value
        self._write(data)

    def delete(self, key: str) -> bool:
        data = self._read()
        if self._full_key(key) not in data:
            return False
        del data[self._full_key(key)]
        self._write(data)
        return True

    def keys(self) -> List[str]:
        prefix = f"{self.namespace}."
        return sorted(k[len(prefix):] for k in self._read() if k.startswith(prefix))

    def _full_key(self, key: str) -> str:
        if not key:
            raise ValueError("key must be a non-empty string.")
        return f"{self.namespace}.{key}"

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
