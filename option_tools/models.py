#!/usr/bin/env python3
"""
models.py

Read-only snapshot types for products and their options, built from
the nodes returned by the products query.

Matching rules:
- has_option_named: case-insensitive EQUALITY (used when adding)
- find_option_containing: case-insensitive SUBSTRING (used when removing)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class OptionValue:
    id: str
    name: str

    @classmethod
    def from_node(cls, node: dict) -> "OptionValue":
        return cls(id=node.get("id"), name=node.get("name", ""))


@dataclass(frozen=True)
class Option:
    id: str
    name: str
    position: int
    values: Tuple[OptionValue, ...] = ()

    @classmethod
    def from_node(cls, node: dict) -> "Option":
        return cls(
            id=node.get("id"),
            name=node.get("name", ""),
            position=node.get("position") or 0,
            values=tuple(OptionValue.from_node(v) for v in node.get("optionValues") or []),
        )

    @property
    def value_names(self) -> List[str]:
        return [v.name for v in self.values]


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    options: Tuple[Option, ...] = ()

    @classmethod
    def from_node(cls, node: dict) -> "Product":
        return cls(
            id=node.get("id"),
            title=node.get("title", ""),
            options=tuple(Option.from_node(o) for o in node.get("options") or []),
        )

    def has_option_named(self, name: str) -> bool:
        wanted = name.lower()
        return any(o.name.lower() == wanted for o in self.options)

    def find_option_containing(self, term: str) -> Optional[Option]:
        """First option whose name contains `term` (case-insensitive), else None."""
        needle = term.lower()
        for option in self.options:
            if needle in option.name.lower():
                return option
        return None

    def to_rows(self) -> List[dict]:
        """One flat row per option, for CSV export."""
        return [
            {
                "Product ID": self.id,
                "Title": self.title,
                "Option": o.name,
                "Position": o.position,
                "Values": ", ".join(o.value_names),
            }
            for o in self.options
        ]


@dataclass
class BulkResult:
    """
    Outcome of one bulk workflow run.

    `count` is only a meaningful success signal when `success` is True.
    A partially applied run reports failure with its errors.
    """
    success: bool
    count: int = 0
    errors: List[str] = field(default_factory=list)
    jobs: List[dict] = field(default_factory=list)

    @property
    def error_message(self) -> Optional[str]:
        return "; ".join(self.errors) if self.errors else None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "count": self.count,
            "errors": list(self.errors),
            "jobs": list(self.jobs),
        }
