"""Reduce command failures to one actionable line."""

import re

# Best-effort: English prefixes only; localized messages fall back to the last line.
_MARKER_PATTERN = re.compile(r"(?:^|\s)(?:fatal:|error:)", re.IGNORECASE)


def extract_diagnostic_line(error: BaseException | str) -> str:
    """Pick the most useful line out of an error message.

    Prefers the first line carrying a `fatal:` or `error:` marker, then the
    last non-empty line, then the whole trimmed message.
    """
    trimmed = str(error).strip()
    lines = [line.strip() for line in trimmed.split("\n") if line.strip()]
    for line in lines:
        if _MARKER_PATTERN.search(line):
            return line
    if lines:
        return lines[-1]
    return trimmed
