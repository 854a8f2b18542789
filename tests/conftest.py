"""Root conftest — strips manifest-root overrides BEFORE any test runs.

The resolver snapshots the environment at construction, so a developer's
DOTNET_WORKLOAD_MANIFEST_* variables would otherwise leak into every test
that builds a provider without an explicit lookup.
"""

import os

for _name in list(os.environ):
    if _name.startswith("DOTNET_WORKLOAD_MANIFEST_"):
        del os.environ[_name]
