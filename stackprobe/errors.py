"""Exception types raised by the recognition engine.

Everything fatal derives from RecognitionError so callers (the CLI in
particular) can catch one type. Soft failures never raise; they are logged
and only disqualify the file or manifest candidate involved.
"""


class RecognitionError(Exception):
    """Base class for fatal recognition errors."""


class RuleLoadError(RecognitionError):
    """A rule document is missing, malformed, or incomplete."""


class ProjectRootError(RecognitionError):
    """The project root does not exist or is not a directory."""


class HierarchyError(RecognitionError):
    """The matched stacks cannot be arranged into a valid forest."""


class DuplicateStackError(HierarchyError):
    """Two matched stacks share a name."""


class UnknownParentError(HierarchyError):
    """A matched stack names a parent that did not match."""


class CycleError(HierarchyError):
    """The parent/child relation between matched stacks contains a cycle."""

    def __init__(self, name: str):
        super().__init__(f"Cycle detected in tech stack hierarchy involving `{name}`.")
        self.name = name


class UnsupportedFormatError(RecognitionError):
    """An architecture output format other than JSON was requested."""


class CacheDecodeError(RecognitionError):
    """A cache file exists but does not hold a valid architecture model."""
