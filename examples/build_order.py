"""Print the build order of a small set of targets.

Each key lists the targets that depend on it: B and C both need A,
and B also needs C.
"""

import depman as dm

dependencies = {
    "A": ["B", "C"],
    "C": ["B"],
}

if __name__ == "__main__":
    dm.print_dependencies(dependencies)  # A C B
