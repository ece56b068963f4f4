"""Architecture model produced by a recognition run.

Includes Pydantic models for the JSON snapshot and a NetworkX view of the
stack hierarchy.
"""

import json
from datetime import datetime
from typing import Any

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field


class ManifestCheckResult(BaseModel):
    """Evidence collected while validating a dependency manifest."""

    model_config = ConfigDict(populate_by_name=True)

    manifest_path: str = Field(alias="path", description="Manifest path relative to the project root")
    format: str = Field(default="text", description="Manifest format the rule declared")
    required_satisfied: list[str] = Field(
        default_factory=list, alias="requiredSatisfied", description="Required dependencies found"
    )
    any_satisfied: list[str] = Field(
        default_factory=list, alias="anySatisfied", description="Any-of dependencies found"
    )


class TechStackMatch(BaseModel):
    """A technology stack detected within a project."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Stack name")
    description: str = Field(default="", description="Stack description")
    parent: str = Field(default="", description="Parent stack name")
    children: list[str] = Field(default_factory=list, description="Child stack names (sorted)")
    relevant_files: list[str] = Field(
        default_factory=list, alias="relevantFiles", description="Files matched by the stack's patterns"
    )
    aggregated_files: list[str] = Field(
        default_factory=list,
        alias="aggregatedFiles",
        description="Relevant files of the stack and its whole subtree",
    )
    keyword_hits: list[str] = Field(
        default_factory=list, alias="keywordHits", description="Files where a keyword was found"
    )
    manifest_evidence: list[ManifestCheckResult] = Field(
        default_factory=list, alias="manifests", description="Satisfied manifest checks"
    )
    inactive_files: list[str] = Field(
        default_factory=list,
        alias="inactiveFiles",
        description="Project files not matched by this stack's patterns",
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Encode using the snapshot field names, omitting empty optionals."""
        data = self.model_dump(by_alias=True, mode="json")
        for key in ("description", "parent"):
            if not data[key]:
                del data[key]
        return data


class ArchitectureModel(BaseModel):
    """Snapshot of every stack recognized in one project."""

    model_config = ConfigDict(populate_by_name=True)

    project_root: str = Field(alias="projectRoot", description="Absolute project root")
    project_name: str = Field(alias="projectName", description="Base name of the project root")
    generated_at: datetime = Field(alias="generatedAt", description="When the model was generated")
    tech_stacks: list[TechStackMatch] = Field(
        default_factory=list, alias="techStacks", description="Matched stacks in rule order"
    )
    unclassified_files: list[str] = Field(
        default_factory=list,
        alias="unclassifiedFiles",
        description="Files matched by no stack",
    )
    recognizer_version: str = Field(
        default="", alias="recognizerVersion", description="Version of the recognizer"
    )
    cache_file: str = Field(
        default="", alias="cacheFile", description="Cache file this model was written to or read from"
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Encode as the architecture snapshot document."""
        data: dict[str, Any] = {
            "projectRoot": self.project_root,
            "projectName": self.project_name,
            "generatedAt": self.generated_at.isoformat(),
            "recognizerVersion": self.recognizer_version,
        }
        if self.cache_file:
            data["cacheFile"] = self.cache_file
        data["techStacks"] = [stack.to_json_dict() for stack in self.tech_stacks]
        data["unclassifiedFiles"] = list(self.unclassified_files)
        return data

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_json_dict(), indent=indent)

    @classmethod
    def from_json_dict(cls, data: dict[str, Any]) -> "ArchitectureModel":
        """Decode a snapshot document. ``cacheFile`` is optional."""
        return cls.model_validate(data)

    def get_stack(self, name: str) -> TechStackMatch | None:
        """Look up a matched stack by name."""
        for stack in self.tech_stacks:
            if stack.name == name:
                return stack
        return None

    @property
    def stack_names(self) -> list[str]:
        return [stack.name for stack in self.tech_stacks]


def hierarchy_graph(stacks: list[TechStackMatch]) -> nx.DiGraph:
    """Build a directed parent -> child graph of matched stacks.

    Args:
        stacks: Matches with ``children`` already resolved.

    Returns:
        DiGraph whose nodes are stack names, with ``description`` and
        ``relevant_count`` node attributes.
    """
    G = nx.DiGraph()
    for stack in stacks:
        G.add_node(
            stack.name,
            description=stack.description,
            relevant_count=len(stack.relevant_files),
        )
    for stack in stacks:
        for child in stack.children:
            G.add_edge(stack.name, child)
    return G


def root_stacks(stacks: list[TechStackMatch]) -> list[str]:
    """Names of stacks without a parent, in model order."""
    return [stack.name for stack in stacks if not stack.parent]
