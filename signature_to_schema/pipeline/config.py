"""
Configuration for the schema resolver and the command line tool.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ReferenceMode(str, Enum):
    """How references to named declarations end up in the schema."""

    EXPAND = "expand"  # Inline; only recursive declarations go to the dependency table
    SHARE = "share"  # Every named declaration goes to the dependency table


@dataclass
class ResolverConfig:
    """Configuration options for schema resolution."""

    reference_mode: ReferenceMode = ReferenceMode.EXPAND

    # Resolve references to type aliases instead of rejecting them
    resolve_type_aliases: bool = False

    # Functions the command line tool skips
    ignore_functions: list[str] = field(default_factory=list)

    # Add a $comment with the generating command line to the output
    add_generation_comment: bool = True

    def __post_init__(self):
        self.reference_mode = ReferenceMode(self.reference_mode)

    @staticmethod
    def from_dict(d: dict) -> ResolverConfig:
        """Create a config from a dictionary."""
        config = ResolverConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        config.reference_mode = ReferenceMode(config.reference_mode)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "reference_mode": self.reference_mode.value,
            "resolve_type_aliases": self.resolve_type_aliases,
            "ignore_functions": self.ignore_functions,
            "add_generation_comment": self.add_generation_comment,
        }
