"""CLI interface for stackprobe.

Provides commands for recognizing a project's technology stacks, reading
cached results, and validating rule catalogs.
"""

import json
import sys
from pathlib import Path
from typing import NoReturn

import click
import networkx as nx

from stackprobe import __version__
from stackprobe.config import RecognizerOptions
from stackprobe.errors import RecognitionError, RuleLoadError
from stackprobe.logging import set_verbosity


def _build_recognizer(rules: str | None, options: RecognizerOptions):
    from stackprobe.analyzers.rule_loader import load_default_rules, load_rules
    from stackprobe.recognizer import ProjectRecognizer

    loaded = load_rules(rules) if rules else load_default_rules()
    return ProjectRecognizer(loaded, options)


def _fail(message: str) -> NoReturn:
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="stackprobe")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """stackprobe - recognize technology stacks in a project tree."""
    set_verbosity(verbose)


@cli.command()
@click.argument("project_root", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--rules",
    type=click.Path(exists=True),
    default=None,
    help="Rule file or profiles directory (default: bundled catalog)",
)
@click.option("--cache-root", default=None, help="Cache directory (absolute or project-relative)")
@click.option("--no-cache", is_flag=True, help="Do not write the model to the cache")
@click.option("--no-inactive", is_flag=True, help="Leave inactiveFiles empty")
@click.option("--diff", "show_diff", is_flag=True, help="Print changes since the cached model")
def recognize(
    project_root: str,
    rules: str | None,
    cache_root: str | None,
    no_cache: bool,
    no_inactive: bool,
    show_diff: bool,
) -> None:
    """Recognize the technology stacks of a project.

    PROJECT_ROOT: Path to the project to inspect.
    """
    from stackprobe.utils.snapshots import diff_models

    options = RecognizerOptions.from_env(
        cache_root=cache_root,
        include_inactive_files=False if no_inactive else None,
    )
    try:
        recognizer = _build_recognizer(rules, options)
        previous = recognizer.load_cached(project_root) if show_diff else None
        model = recognizer.recognize(project_root, save_to_cache=not no_cache)
    except RecognitionError as e:
        _fail(f"Recognition failed: {e}")

    if show_diff:
        click.echo(json.dumps(diff_models(model, previous), indent=2))
    else:
        click.echo(model.to_json(indent=2))


@cli.command()
@click.argument("project_root", type=click.Path(file_okay=False))
@click.option("--cache-root", default=None, help="Cache directory (absolute or project-relative)")
def cached(project_root: str, cache_root: str | None) -> None:
    """Print the cached architecture model of a project.

    PROJECT_ROOT: Path to the project whose cache entry to read.
    """
    from stackprobe.utils.cache import load_architecture_model

    options = RecognizerOptions.from_env(cache_root=cache_root)
    try:
        model = load_architecture_model(Path(project_root).absolute(), options.cache_root)
    except RecognitionError as e:
        _fail(f"Cannot read cache: {e}")

    if model is None:
        _fail(f"No cached model for {project_root}")
    click.echo(model.to_json(indent=2))


@cli.command()
@click.argument("rules", type=click.Path(exists=True))
def validate(rules: str) -> None:
    """Validate a rule file or profiles directory.

    RULES: Rule file or directory of JSON profiles.
    """
    from stackprobe.analyzers.rule_loader import load_rules

    try:
        loaded = load_rules(rules)
    except RuleLoadError as e:
        _fail(f"Invalid rules: {e}")

    names = [rule.name for rule in loaded]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    click.echo(f"{len(loaded)} rule(s) loaded from {rules}")
    if duplicates:
        _fail(f"Duplicate rule names: {', '.join(duplicates)}")


@cli.command()
@click.argument("project_root", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--rules",
    type=click.Path(exists=True),
    default=None,
    help="Rule file or profiles directory (default: bundled catalog)",
)
def tree(project_root: str, rules: str | None) -> None:
    """Print the recognized stack hierarchy as a tree.

    PROJECT_ROOT: Path to the project to inspect.
    """
    from stackprobe.models.architecture import hierarchy_graph, root_stacks

    try:
        recognizer = _build_recognizer(rules, RecognizerOptions.from_env())
        model = recognizer.recognize(project_root, save_to_cache=False)
    except RecognitionError as e:
        _fail(f"Recognition failed: {e}")

    G = hierarchy_graph(model.tech_stacks)
    click.echo(model.project_name)
    for root in root_stacks(model.tech_stacks):
        depths = nx.shortest_path_length(G, source=root)
        for name in nx.dfs_preorder_nodes(G, source=root):
            count = G.nodes[name]["relevant_count"]
            click.echo(f"{'  ' * (depths[name] + 1)}{name} ({count} files)")

    if model.unclassified_files:
        click.echo(f"  <unclassified> ({len(model.unclassified_files)} files)")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
