# uml_service/src/config.py
"""
Environment-driven settings for the UML graph service.

UML_KIND_PRIORITY  comma separated relation kinds, lowest rank first
UML_LOG_LEVEL      logging level name (default INFO)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Tuple

from uml_service.src.core.uml.uml_relation import (
    DEFAULT_KIND_PRIORITY,
    RelationKind,
    build_rank_table,
)


@dataclass(frozen=True)
class Settings:
    kind_priority: Tuple[RelationKind, ...] = DEFAULT_KIND_PRIORITY
    log_level: str = "INFO"
    kind_ranks: Dict[RelationKind, int] = field(init=False, compare=False)

    def __post_init__(self):
        # Validates that every kind is ranked exactly once
        object.__setattr__(self, "kind_ranks", build_rank_table(self.kind_priority))
        # getLevelName maps a registered level name to its number
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")


def parse_kind_priority(raw: str) -> Tuple[RelationKind, ...]:
    names = [part for part in (p.strip() for p in raw.split(",")) if part]
    return tuple(RelationKind.parse(name) for name in names)


def load_settings() -> Settings:
    raw_priority = os.getenv("UML_KIND_PRIORITY")
    priority = parse_kind_priority(raw_priority) if raw_priority else DEFAULT_KIND_PRIORITY
    return Settings(
        kind_priority=priority,
        log_level=os.getenv("UML_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
