"""Target descriptors and the registry that holds them."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator

from vestige_init.merge import MergeFormat, MergeStrategy, strategy_for


@dataclass(frozen=True)
class TargetDescriptor:
    """One tool or IDE that can load the service from its own configuration.

    Attributes:
        key:           machine name, e.g. "cursor"
        name:          display name, e.g. "Cursor"
        detect:        side-effect-free predicate; may raise, callers fail closed
        config_path:   file the tool keeps its MCP servers in (None if unknown
                       on this platform)
        merge_format:  how the registration is written
        note:          extra hint printed after a successful configuration
        delegate_argv: for CLI_DELEGATE, the registration command; "{name}" and
                       "{binary}" are substituted
    """

    key: str
    name: str
    detect: Callable[[], bool]
    config_path: Path | None
    merge_format: MergeFormat
    note: str | None = None
    delegate_argv: tuple[str, ...] = ()

    def locate_config(self) -> Path | None:
        return self.config_path

    @property
    def is_delegate(self) -> bool:
        return self.merge_format is MergeFormat.CLI_DELEGATE

    @property
    def strategy(self) -> MergeStrategy:
        return strategy_for(self.merge_format)

    def delegate_command(self, service_name: str, binary_path: Path | str) -> list[str]:
        return [
            part.format(name=service_name, binary=str(binary_path))
            for part in self.delegate_argv
        ]


class TargetRegistry:
    """Ordered, read-only catalog of targets keyed by unique key and name."""

    def __init__(self, targets: Iterable[TargetDescriptor]) -> None:
        ordered = tuple(targets)
        seen: set[str] = set()
        for target in ordered:
            for ident in (target.key, target.name):
                if ident in seen:
                    raise ValueError(f"Duplicate target identifier: {ident!r}")
                seen.add(ident)
            if target.is_delegate and not target.delegate_argv:
                raise ValueError(f"Delegate target {target.key!r} has no delegate_argv")
        self._targets = ordered
        self._by_key = {t.key: t for t in ordered}

    def __iter__(self) -> Iterator[TargetDescriptor]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def get(self, key: str) -> TargetDescriptor | None:
        return self._by_key.get(key)

    def keys(self) -> list[str]:
        return [t.key for t in self._targets]

    def names(self) -> list[str]:
        return [t.name for t in self._targets]

    def select(self, keys: Iterable[str]) -> TargetRegistry:
        """Return a registry restricted to `keys`, keeping registry order."""
        wanted = set(keys)
        unknown = wanted - set(self._by_key)
        if unknown:
            raise KeyError(", ".join(sorted(unknown)))
        return TargetRegistry(t for t in self._targets if t.key in wanted)
