"""Suite registry: suite name -> detector argument string."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping

import yaml

from vp_common.errors import ConfigMalformed, ConfigUnreadable, SuiteNotFound

logger = logging.getLogger(__name__)


class SuiteRegistry:
    """Read-only mapping of suites loaded from the configuration artifact."""

    def __init__(self, suites: Mapping[str, str], source: Path | None = None) -> None:
        self._suites: Dict[str, str] = dict(suites)
        self.source = source

    @classmethod
    def load(cls, candidates: Iterable[Path]) -> "SuiteRegistry":
        """Load the first existing candidate file.

        Raises:
            ConfigUnreadable: no candidate exists or the file cannot be read.
            ConfigMalformed: the content is not a mapping of names to strings.
        """
        paths = list(candidates)
        path = next((p for p in paths if p.is_file()), None)
        if path is None:
            raise ConfigUnreadable(
                "failed to read suites configuration: none of "
                + ", ".join(str(p) for p in paths)
                + " exists",
                context={"candidates": paths},
            )
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise ConfigUnreadable(
                f"failed to read {path}: {exc}", context={"path": path}, cause=exc
            ) from exc
        try:
            data = yaml.safe_load(raw)
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise ConfigMalformed(
                f"failed to parse {path}: {exc}", context={"path": path}, cause=exc
            ) from exc
        return cls(_validate_suites(data, path), source=path)

    def resolve(self, name: str) -> str:
        try:
            return self._suites[name]
        except KeyError:
            raise SuiteNotFound(
                f"suite not found: {name}",
                context={"suite": name, "available": self.names(), "source": self.source},
            ) from None

    def names(self) -> List[str]:
        return sorted(self._suites)

    def __contains__(self, name: object) -> bool:
        return name in self._suites

    def __len__(self) -> int:
        return len(self._suites)


def _validate_suites(data: object, path: Path) -> Dict[str, str]:
    if data is None:
        logger.warning("Suites configuration %s is empty", path)
        return {}
    if not isinstance(data, Mapping):
        raise ConfigMalformed(
            f"failed to parse {path}: expected a mapping of suite names to arguments",
            context={"path": path, "type": type(data).__name__},
        )
    suites: Dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ConfigMalformed(
                f"failed to parse {path}: suite {key!r} must map to an argument string",
                context={"path": path, "suite": key},
            )
        suites[key] = value
    return suites
