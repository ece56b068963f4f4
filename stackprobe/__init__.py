"""stackprobe - technology stack recognition for project trees."""

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"
