"""Button name -> MediaBox key code lookup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Protocol, Tuple, Union

import yaml

logger = logging.getLogger(__name__)


class ButtonLookup(Protocol):
    def find_by_name(self, name: str) -> Optional[str]:
        ...


class ButtonTable:
    """
    Ordered, read-only sequence of ``{name, code}`` records.

    Lookups are exact-name matches; if a name appears twice the first record wins.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()) -> None:
        entries: List[Tuple[str, str]] = []
        for idx, rec in enumerate(records):
            if not isinstance(rec, Mapping):
                raise ValueError(f"button record #{idx} is not a mapping: {rec!r}")
            name = rec.get("name")
            code = rec.get("code")
            if not isinstance(name, str) or not isinstance(code, str):
                raise ValueError(f"button record #{idx} needs string 'name' and 'code': {rec!r}")
            entries.append((name, code))
        self._entries: Tuple[Tuple[str, str], ...] = tuple(entries)

    def find_by_name(self, name: str) -> Optional[str]:
        for entry_name, code in self._entries:
            if entry_name == name:
                return code
        return None

    def names(self) -> List[str]:
        return [name for name, _ in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return any(entry_name == name for entry_name, _ in self._entries)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._entries)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ButtonTable":
        """Load a table from a ``.yaml``/``.yml`` or ``.json`` file."""
        p = Path(path)
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text)
        elif p.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            raise ValueError(f"unsupported button table format: {p.name}")

        if isinstance(data, Mapping):
            data = data.get("buttons")
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ValueError(f"{p.name}: expected a list of buttons or a 'buttons' list")

        table = cls(data)
        logger.info("button table loaded: %s buttons from %s", len(table), p)
        return table
