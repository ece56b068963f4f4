"""Recognition rule models.

Rules are declarative: they describe which files, keywords, and manifest
dependencies identify a technology stack. They are decoded once from JSON
rule documents and treated as read-only configuration afterwards.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

# Top-level fields of a JSON manifest that hold dependency maps when a
# manifest rule does not name its own.
DEFAULT_DEPENDENCY_FIELDS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)

ManifestFormat = Literal["text", "json"]


def _none_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _none_as_empty_str(value: Any) -> Any:
    return "" if value is None else value


class ManifestRule(BaseModel):
    """How to validate a dependency manifest file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path_pattern: StrictStr = Field(
        alias="pathPattern", description="Glob identifying candidate manifest files"
    )
    format: ManifestFormat = Field(default="text", description="Manifest format")
    required: list[StrictStr] = Field(
        default_factory=list, description="Dependencies that must all be present"
    )
    any_of: list[StrictStr] = Field(
        default_factory=list,
        alias="anyOf",
        description="Dependencies of which at least one must be present",
    )
    dependency_fields: list[StrictStr] = Field(
        default_factory=list,
        alias="dependencyFields",
        description="JSON fields holding dependency maps",
    )

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> Any:
        if value is None:
            return "text"
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("required", "any_of", "dependency_fields", mode="before")
    @classmethod
    def _lists_default(cls, value: Any) -> Any:
        return _none_as_empty_list(value)

    @property
    def effective_dependency_fields(self) -> list[str]:
        """Configured dependency fields, or the conventional four."""
        return list(self.dependency_fields) or list(DEFAULT_DEPENDENCY_FIELDS)


class RecognitionRule(BaseModel):
    """Signature of a single technology stack."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: StrictStr = Field(description="Unique stack name")
    description: StrictStr = Field(default="", description="Human readable summary")
    parent: StrictStr = Field(default="", description="Name of the parent stack, if any")
    all_of_files: list[StrictStr] = Field(
        default_factory=list,
        alias="allOfFiles",
        description="Patterns that must each match at least one file",
    )
    any_of_files: list[StrictStr] = Field(
        default_factory=list,
        alias="anyOfFiles",
        description="Patterns of which at least one must match",
    )
    excluded_files: list[StrictStr] = Field(
        default_factory=list,
        alias="excludedFiles",
        description="Patterns that invalidate the rule when matched",
    )
    keywords: list[StrictStr] = Field(
        default_factory=list, description="Literal strings that must appear in project files"
    )
    manifests: list[ManifestRule] = Field(
        default_factory=list, description="Dependency manifest checks"
    )

    @field_validator("description", "parent", mode="before")
    @classmethod
    def _strings_default(cls, value: Any) -> Any:
        return _none_as_empty_str(value)

    @field_validator(
        "all_of_files", "any_of_files", "excluded_files", "keywords", "manifests", mode="before"
    )
    @classmethod
    def _lists_default(cls, value: Any) -> Any:
        return _none_as_empty_list(value)
