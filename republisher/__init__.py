"""
Republisher - Mirror an upstream library onto a package registry under a new name.

This package compares the latest upstream release tag with the version
published on the registry and, when upstream is ahead, clones the tagged
source tree and rewrites its README and manifest so it is ready to publish.
"""

__version__ = "1.0.0"
