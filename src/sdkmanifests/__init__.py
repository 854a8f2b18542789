"""sdk-manifests — resolve SDK workload manifest directories on disk.

Given an SDK root, an SDK version and optional pins, works out which
directory holds each installed workload manifest across the user,
installation and override manifest roots, in a stable order.

Package entry point. Exports the version string only; import
sdkmanifests.manifests.provider for the resolver itself.
"""

__version__ = "0.1.0"
