"""Branch name normalization and path-safe naming."""

import re
from dataclasses import dataclass

# Order matters: the longer remote prefixes must be tried before "origin/".
_BRANCH_PREFIXES = (
    "refs/heads/",
    "refs/remotes/origin/",
    "remotes/origin/",
    "origin/",
)


def normalize_branch_name(raw: str) -> str:
    """Reduce a branch reference to its short local name.

    Strips surrounding whitespace, then the longest matching one of
    `refs/heads/`, `refs/remotes/origin/`, `remotes/origin/`, `origin/`,
    repeating until no prefix matches so that the result is a fixed point
    (normalizing twice gives the same answer as normalizing once).
    The result may be empty (e.g. for "origin/"); callers must reject that.

    Examples:
        >>> normalize_branch_name("origin/feature/foo")
        'feature/foo'
        >>> normalize_branch_name("refs/remotes/origin/main")
        'main'
    """
    name = raw.strip()
    while True:
        matching = [prefix for prefix in _BRANCH_PREFIXES if name.startswith(prefix)]
        if not matching:
            return name
        longest = max(matching, key=len)
        name = name[len(longest) :].strip()


@dataclass(frozen=True)
class BranchRef:
    """A user-supplied branch reference and its normalized short name."""

    raw: str
    normalized: str

    @classmethod
    def parse(cls, raw: str) -> "BranchRef":
        return cls(raw=raw, normalized=normalize_branch_name(raw))


def to_safe_path_segment(value: str) -> str:
    """Convert an arbitrary string into one filesystem-safe path segment.

    Examples:
        >>> to_safe_path_segment("feature/foo bar")
        'feature-foo-bar'
    """
    segment = value.strip()
    segment = re.sub(r'[\\/:*?"<>|]', "-", segment)
    segment = re.sub(r"\s+", "-", segment)
    segment = re.sub(r"\.+$", "", segment)
    return re.sub(r"-+", "-", segment)
