"""Merge strategies: where each tool keeps its MCP server map, and how to add to it.

Every strategy mutates only the registration subtree of a parsed document and
leaves every sibling key as it found it.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from vestige_init.errors import UnmergeableDocumentError


class MergeFormat(str, Enum):
    STANDARD_SERVERS = "standard-servers"              # root.mcpServers.<name>
    NESTED_MCP_SERVERS = "nested-mcp-servers"          # root.mcp.servers.<name>
    EDITOR_SETTINGS_NESTED = "editor-settings-nested"  # root.mcp.servers.<name> in editor settings
    PROJECT_WILDCARD = "project-wildcard"              # root.projects["*"].mcpServers.<name>
    CLI_DELEGATE = "cli-delegate"                      # the tool's own CLI writes the file


class RegistrationEntry(BaseModel):
    """The payload a tool needs to launch the service. Same shape for every tool."""

    command: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)


def registration_entry(binary_path: Any) -> dict[str, Any]:
    return RegistrationEntry(command=str(binary_path)).model_dump()


@dataclass(frozen=True)
class MergeResult:
    registered: bool  # the entry was added by this merge
    changed: bool     # the document differs from what was loaded and must be written


def _descend(document: dict, path: tuple[str, ...], create: bool) -> dict | None:
    node: Any = document
    for depth, key in enumerate(path):
        child = node.get(key)
        if child is None:
            if not create:
                return None
            child = {}
            node[key] = child
        elif not isinstance(child, dict):
            location = ".".join(path[: depth + 1])
            raise UnmergeableDocumentError(
                f"expected an object at '{location}', found {type(child).__name__}",
                details={"location": location},
            )
        node = child
    return node


@dataclass(frozen=True)
class MergeStrategy:
    """Plain server map at a fixed key path."""

    servers_path: tuple[str, ...]
    allow_comments: bool = False

    def lookup(self, document: dict, name: str) -> Any:
        """Return the existing entry for `name`, or None. Never mutates."""
        servers = _descend(document, self.servers_path, create=False)
        return servers.get(name) if servers is not None else None

    def merge(self, document: dict, name: str, entry: dict) -> MergeResult:
        servers = _descend(document, self.servers_path, create=True)
        if servers.get(name):
            return MergeResult(registered=False, changed=False)
        servers[name] = copy.deepcopy(entry)
        return MergeResult(registered=True, changed=True)


@dataclass(frozen=True)
class ProjectWildcardStrategy(MergeStrategy):
    """Server map under the wildcard project, plus the project trust flag.

    The trust flag is forced to true on every run, whether or not the
    registration already existed.
    """

    trust_key: str = "hasTrustDialogAccepted"

    def merge(self, document: dict, name: str, entry: dict) -> MergeResult:
        result = super().merge(document, name, entry)
        project = _descend(document, self.servers_path[:-1], create=True)
        trust_changed = project.get(self.trust_key) is not True
        project[self.trust_key] = True
        return MergeResult(
            registered=result.registered,
            changed=result.changed or trust_changed,
        )


STRATEGIES: dict[MergeFormat, MergeStrategy] = {
    MergeFormat.STANDARD_SERVERS: MergeStrategy(("mcpServers",)),
    MergeFormat.NESTED_MCP_SERVERS: MergeStrategy(("mcp", "servers")),
    MergeFormat.EDITOR_SETTINGS_NESTED: MergeStrategy(("mcp", "servers"), allow_comments=True),
    MergeFormat.PROJECT_WILDCARD: ProjectWildcardStrategy(("projects", "*", "mcpServers")),
}


def strategy_for(merge_format: MergeFormat) -> MergeStrategy:
    """Return the file-merge strategy for a format. CLI_DELEGATE has none."""
    try:
        return STRATEGIES[merge_format]
    except KeyError:
        raise ValueError(f"{merge_format.value} targets are not merged by file") from None
