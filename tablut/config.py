from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from tablut.search import SearchConfig


def load_yaml_config(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, not {type(data).__name__}.")
    return data


@dataclass
class PlayConfig:
    search_depth: int = 1
    move_limit: int = 0
    human_side: Optional[str] = "attacker"
    show_coordinates: bool = True

    def __post_init__(self) -> None:
        if self.human_side not in (None, "attacker", "defender"):
            raise ValueError(f"Unknown side {self.human_side!r}.")

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "PlayConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in cfg.items() if key in known})

    def search_config(self) -> SearchConfig:
        return SearchConfig(depth=self.search_depth)
