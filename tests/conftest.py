"""Pytest configuration and shared fixtures."""

import json
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def make_project(temp_dir: Path):
    """Factory fixture: build a project directory from a file mapping."""

    def _make(files: dict[str, str], name: str = "project") -> Path:
        return write_files(temp_dir / name, files)

    return _make


@pytest.fixture
def react_project(temp_dir: Path) -> Path:
    """A minimal React project: package.json plus one TSX source."""
    project = temp_dir / "shop"
    return write_files(project, {
        "package.json": json.dumps({"dependencies": {"react": "^18.0.0"}}),
        "src/app.tsx": "export default function App() { return null; }\n",
    })


@pytest.fixture
def mixed_project(temp_dir: Path) -> Path:
    """A project with a Node.js frontend and a Flask backend."""
    project = temp_dir / "mixed"
    return write_files(project, {
        "package.json": json.dumps({
            "name": "frontend",
            "dependencies": {"react": "^18.0.0", "react-dom": "^18.0.0"},
            "devDependencies": {"jest": "^29.0.0"},
        }),
        "web/index.jsx": "import React from 'react';\n",
        "web/util.js": "export const add = (a, b) => a + b;\n",
        "requirements.txt": "flask==2.0.1  # web framework\nrequests>=2.0\n",
        "api/app.py": "from flask import Flask\napp = Flask(__name__)\n",
        "README.md": "# Mixed\n",
        "docs/notes.txt": "nothing to see\n",
    })


@pytest.fixture
def mixed_rules() -> list[dict]:
    """Rules with a two-level hierarchy matching ``mixed_project``."""
    return [
        {
            "name": "nodejs",
            "description": "Node.js",
            "allOfFiles": ["package.json"],
            "anyOfFiles": ["*.js", "*.jsx"],
        },
        {
            "name": "react",
            "parent": "nodejs",
            "anyOfFiles": ["*.jsx"],
            "manifests": [
                {"pathPattern": "package.json", "format": "json", "anyOf": ["react", "preact"]},
            ],
        },
        {
            "name": "python",
            "anyOfFiles": ["*.py", "requirements.txt"],
        },
        {
            "name": "flask",
            "parent": "python",
            "anyOfFiles": ["api/*.py"],
            "keywords": ["Flask("],
            "manifests": [
                {"pathPattern": "requirements.txt", "required": ["flask"]},
            ],
        },
        {
            "name": "django",
            "parent": "python",
            "allOfFiles": ["manage.py"],
        },
    ]


@pytest.fixture
def rules_file(temp_dir: Path, mixed_rules: list[dict]) -> Path:
    """Write ``mixed_rules`` as a container rule document."""
    path = temp_dir / "rules.json"
    path.write_text(json.dumps({"rules": mixed_rules}))
    return path
