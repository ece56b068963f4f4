"""Tests for the stackprobe command line interface."""

import json

from click.testing import CliRunner

from stackprobe import __version__
from stackprobe.cli import cli
from stackprobe.utils.cache import build_cache_file_name


def _invoke(*args: str):
    return CliRunner().invoke(cli, list(args))


class TestRecognizeCommand:
    """Tests for `stackprobe recognize`."""

    def test_prints_model_json(self, mixed_project, rules_file) -> None:
        result = _invoke("recognize", str(mixed_project), "--rules", str(rules_file), "--no-cache")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["projectName"] == "mixed"
        assert [s["name"] for s in data["techStacks"]] == ["nodejs", "react", "python", "flask"]
        assert data["unclassifiedFiles"] == ["README.md", "docs/notes.txt"]
        assert "cacheFile" not in data

    def test_writes_cache(self, mixed_project, rules_file, temp_dir) -> None:
        cache_root = temp_dir / "cache"
        result = _invoke(
            "recognize", str(mixed_project), "--rules", str(rules_file), "--cache-root", str(cache_root)
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["cacheFile"].startswith(str(cache_root))
        assert len(list(cache_root.iterdir())) == 1

    def test_no_inactive(self, mixed_project, rules_file) -> None:
        result = _invoke(
            "recognize", str(mixed_project), "--rules", str(rules_file), "--no-cache", "--no-inactive"
        )
        assert result.exit_code == 0, result.output
        assert all(s["inactiveFiles"] == [] for s in json.loads(result.output)["techStacks"])

    def test_diff_against_cache(self, mixed_project, rules_file, temp_dir) -> None:
        cache_root = str(temp_dir / "cache")
        base = ["recognize", str(mixed_project), "--rules", str(rules_file), "--cache-root", cache_root]

        first = _invoke(*base, "--diff")
        assert first.exit_code == 0, first.output
        assert json.loads(first.output)["added_stacks"] == ["nodejs", "react", "python", "flask"]

        (mixed_project / "CHANGELOG.md").write_text("# Changes\n")
        second = _invoke(*base, "--diff")
        assert second.exit_code == 0, second.output
        delta = json.loads(second.output)
        assert delta["added_stacks"] == []
        assert delta["unclassified"] == {"added": ["CHANGELOG.md"], "removed": []}

    def test_symlinked_root_not_resolved(self, mixed_project, rules_file, temp_dir) -> None:
        """The cache identity of a symlinked root is the link path itself."""
        link = temp_dir / "link"
        link.symlink_to(mixed_project, target_is_directory=True)
        cache_root = temp_dir / "cache"
        result = _invoke(
            "recognize", str(link), "--rules", str(rules_file), "--cache-root", str(cache_root)
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["projectRoot"] == str(link)
        assert data["cacheFile"] == str(cache_root / build_cache_file_name(link))

        cached = _invoke("cached", str(link), "--cache-root", str(cache_root))
        assert cached.exit_code == 0, cached.output
        assert json.loads(cached.output)["projectRoot"] == str(link)

    def test_hierarchy_error_exits_nonzero(self, mixed_project, temp_dir) -> None:
        rules = temp_dir / "cycle.json"
        rules.write_text(json.dumps({"rules": [{"name": "A", "parent": "B"}, {"name": "B", "parent": "A"}]}))
        result = _invoke("recognize", str(mixed_project), "--rules", str(rules), "--no-cache")
        assert result.exit_code == 1
        assert "Cycle detected" in result.output

    def test_missing_root(self, temp_dir) -> None:
        result = _invoke("recognize", str(temp_dir / "missing"))
        assert result.exit_code != 0


class TestCachedCommand:
    """Tests for `stackprobe cached`."""

    def test_prints_cached_model(self, mixed_project, rules_file, temp_dir) -> None:
        cache_root = str(temp_dir / "cache")
        _invoke("recognize", str(mixed_project), "--rules", str(rules_file), "--cache-root", cache_root)
        result = _invoke("cached", str(mixed_project), "--cache-root", cache_root)
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["projectName"] == "mixed"
        assert data["cacheFile"].startswith(cache_root)

    def test_nothing_cached(self, mixed_project, temp_dir) -> None:
        result = _invoke("cached", str(mixed_project), "--cache-root", str(temp_dir / "cache"))
        assert result.exit_code == 1
        assert "No cached model" in result.output


class TestValidateCommand:
    """Tests for `stackprobe validate`."""

    def test_valid_file(self, rules_file) -> None:
        result = _invoke("validate", str(rules_file))
        assert result.exit_code == 0, result.output
        assert "5 rule(s) loaded" in result.output

    def test_invalid_file(self, temp_dir) -> None:
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"rules": [{"description": "no name"}]}))
        result = _invoke("validate", str(path))
        assert result.exit_code == 1
        assert "Invalid rules" in result.output

    def test_duplicate_names(self, temp_dir) -> None:
        path = temp_dir / "dupes.json"
        path.write_text(json.dumps({"rules": [{"name": "x"}, {"name": "x"}]}))
        result = _invoke("validate", str(path))
        assert result.exit_code == 1
        assert "Duplicate rule names: x" in result.output


class TestTreeCommand:
    """Tests for `stackprobe tree`."""

    def test_prints_hierarchy(self, mixed_project, rules_file) -> None:
        result = _invoke("tree", str(mixed_project), "--rules", str(rules_file))
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "mixed",
            "  nodejs (3 files)",
            "    react (1 files)",
            "  python (2 files)",
            "    flask (1 files)",
            "  <unclassified> (2 files)",
        ]


def test_version() -> None:
    result = _invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output
