"""Project recognizer: runs the rule catalog against a project tree.

Example:
    recognizer = ProjectRecognizer.from_profiles_dir("profiles/")
    model = recognizer.recognize("/path/to/project")
    print(model.to_json())
"""

from datetime import UTC, datetime
from pathlib import Path

from stackprobe.analyzers.evaluator import evaluate_rule
from stackprobe.analyzers.files import collect_project_files
from stackprobe.analyzers.hierarchy import build_hierarchy
from stackprobe.analyzers.rule_loader import (
    load_default_rules,
    load_profiles_dir,
    load_rules_file,
)
from stackprobe.config import RecognizerOptions
from stackprobe.errors import ProjectRootError, RecognitionError
from stackprobe.logging import log_operation, logger, progress_bar
from stackprobe.models.architecture import ArchitectureModel, TechStackMatch
from stackprobe.models.rules import RecognitionRule
from stackprobe.utils.cache import load_architecture_model, save_architecture_model


class ProjectRecognizer:
    """Inspects project directories and records their technology stacks.

    The rule catalog and options are fixed for the recognizer's lifetime;
    each ``recognize`` call builds a fresh model.
    """

    def __init__(
        self,
        rules: list[RecognitionRule],
        options: RecognizerOptions | None = None,
    ):
        if not rules:
            raise RecognitionError("At least one recognition rule is required.")
        self._rules: tuple[RecognitionRule, ...] = tuple(rules)
        self.options = options or RecognizerOptions()

    @property
    def rules(self) -> tuple[RecognitionRule, ...]:
        return self._rules

    @classmethod
    def from_config_file(
        cls, config_path: str | Path, options: RecognizerOptions | None = None
    ) -> "ProjectRecognizer":
        """Create a recognizer from a single JSON rule file."""
        return cls(load_rules_file(config_path), options)

    @classmethod
    def from_profiles_dir(
        cls, profiles_dir: str | Path, options: RecognizerOptions | None = None
    ) -> "ProjectRecognizer":
        """Create a recognizer from every JSON profile in a directory."""
        return cls(load_profiles_dir(profiles_dir), options)

    @classmethod
    def from_default_profiles(cls, options: RecognizerOptions | None = None) -> "ProjectRecognizer":
        """Create a recognizer from the bundled rule catalog."""
        return cls(load_default_rules(), options)

    @staticmethod
    def _absolute_root(project_root: str | Path) -> Path:
        if not str(project_root):
            raise ProjectRootError("Project root must not be empty.")
        return Path(project_root).absolute()

    def recognize(self, project_root: str | Path, save_to_cache: bool = True) -> ArchitectureModel:
        """Run every rule against a project and assemble the architecture model.

        Args:
            project_root: Project directory (made absolute, not resolved).
            save_to_cache: Write the model to its cache file afterwards.

        Returns:
            The model; ``cache_file`` is set when it was saved.

        Raises:
            ProjectRootError: The root is missing or not a directory.
            HierarchyError: Duplicate names, unknown parents, or a cycle.
            UnsupportedFormatError: The configured cache format is not JSON.
        """
        root = self._absolute_root(project_root)

        with log_operation("recognize", {"root": root, "rules": len(self._rules)}):
            files = collect_project_files(root)
            logger.info("  Collected %d files", len(files))

            matches: list[TechStackMatch] = []
            for rule in progress_bar(self._rules, desc="Evaluating rules", unit="rules"):
                match = evaluate_rule(
                    rule,
                    root,
                    files,
                    include_inactive_files=self.options.include_inactive_files,
                )
                if match is not None:
                    matches.append(match)

            stacks = build_hierarchy(matches)

            classified = {f for stack in stacks for f in stack.relevant_files}
            unclassified = sorted({f for f in files if f not in classified})

            model = ArchitectureModel(
                project_root=str(root),
                project_name=root.name,
                generated_at=datetime.now(UTC),
                tech_stacks=stacks,
                unclassified_files=unclassified,
                recognizer_version=self.options.recognizer_version,
            )
            logger.info(
                "  Matched %d stack(s), %d unclassified file(s)", len(stacks), len(unclassified)
            )

            if save_to_cache:
                cache_path = save_architecture_model(
                    model, self.options.cache_root, self.options.architecture_format
                )
                model.cache_file = str(cache_path)

        return model

    def load_cached(self, project_root: str | Path) -> ArchitectureModel | None:
        """Load the cached model for a project root, or None if there is none."""
        root = self._absolute_root(project_root)
        return load_architecture_model(root, self.options.cache_root)
