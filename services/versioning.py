"""
Versioning Service

Recipes and quotes are never edited in place. Saving again creates a new
record in the same lineage with the next integer version.
"""

import re

FIRST_VERSION = 1

# Recipe labels step by tenths: 1 -> v1.0, 2 -> v1.1, 11 -> v2.0
_RECIPE_LABEL_RE = re.compile(r'^v?(\d+)\.(\d)$', re.IGNORECASE)


def next_version(current):
    """Version number for the record that supersedes ``current``."""
    if current is None:
        return FIRST_VERSION
    current = int(current)
    if current < FIRST_VERSION:
        raise ValueError(f"Invalid version: {current}")
    return current + 1


def recipe_version_label(version):
    """Display label for a recipe version counter."""
    major, minor = divmod(int(version) - 1, 10)
    return f"v{major + 1}.{minor}"


def quote_version_label(version):
    """Display label for a quote version counter."""
    return f"v{int(version)}"


def version_from_label(label):
    """
    Parse a legacy decimal recipe label ('1.2', 'v2.0') into a counter.

    Raises:
        ValueError: If the label is not a one-decimal version string
    """
    match = _RECIPE_LABEL_RE.match((label or '').strip())
    if not match:
        raise ValueError(f"Invalid version label: {label!r}")
    major, minor = int(match.group(1)), int(match.group(2))
    if major < 1:
        raise ValueError(f"Invalid version label: {label!r}")
    return (major - 1) * 10 + minor + 1


def group_lineages(items):
    """
    Group versioned records by lineage, newest version first.

    Returns a list of version lists ordered by each lineage's newest record id.
    """
    groups = {}
    for item in items:
        groups.setdefault(item.lineage_id, []).append(item)

    lineages = [sorted(versions, key=lambda x: x.version, reverse=True) for versions in groups.values()]
    lineages.sort(key=lambda versions: versions[0].id, reverse=True)
    return lineages
