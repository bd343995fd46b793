#!/usr/bin/env python
"""Check fasim sources for syntax that breaks Python 3.6 compatibility.

With no arguments every module under ``src/fasim`` is checked.
"""

import os
import re
import sys

# Format: (regex, message)
INCOMPATIBLE_PATTERNS = [
    (
        r"^from __future__ import annotations",
        "from __future__ import annotations requires Python 3.7+",
    ),
    (r"(?<!['\"]):\s*=(?!['\"])", "Walrus operator := requires Python 3.8+"),
    (r"def \w+\([^)]*,\s*/", "Positional-only parameters (/) require Python 3.8+"),
    (r"\) -> \w+ \| \w+:", "Union type syntax with | requires Python 3.10+"),
    (r": \w+ \| \w+ =", "Union type syntax with | requires Python 3.10+"),
]

# Builtin generics need 3.9+; typing.Dict, typing.List etc. are used instead.
for _name in ("dict", "list", "set", "tuple", "frozenset"):
    _hint = "{0}[] generic syntax requires Python 3.9+".format(_name)
    INCOMPATIBLE_PATTERNS.append((r"(?::|->) {0}\[".format(_name), _hint))

SOURCE_ROOT = os.path.join(os.path.dirname(__file__), os.pardir, "src", "fasim")

SKIP_FILES = {"check_py36_compat.py"}


def iter_sources(root=SOURCE_ROOT):
    """Yield every Python file below ``root``."""
    for dirpath, _, filenames in os.walk(root):
        for filename in sorted(filenames):
            if filename.endswith(".py"):
                yield os.path.join(dirpath, filename)


def check_file(filepath):
    """Return ``(path, line, message)`` for each incompatibility in a file."""
    if os.path.basename(filepath) in SKIP_FILES:
        return []

    issues = []
    with open(filepath, encoding="utf-8") as f:
        lines = f.read().splitlines()

    for i, line in enumerate(lines, 1):
        if line.strip().startswith("#"):
            continue
        for pattern, message in INCOMPATIBLE_PATTERNS:
            if re.search(pattern, line):
                issues.append((filepath, i, message))
    return issues


def main(argv=None):
    """Check the given files, or the whole package when none are given."""
    paths = (argv if argv is not None else sys.argv[1:]) or list(iter_sources())

    all_issues = []
    for filepath in paths:
        all_issues.extend(check_file(filepath))

    for filepath, line, message in all_issues:
        print("{0}:{1}: {2}".format(filepath, line, message))

    return 1 if all_issues else 0


if __name__ == "__main__":
    sys.exit(main())
