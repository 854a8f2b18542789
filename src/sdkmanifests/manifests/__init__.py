"""Workload manifests — locating manifest directories under SDK manifest roots.

Provides SdkDirectoryManifestProvider for resolving one directory per
installed manifest id, and ReadableWorkloadManifest for opening the
resolved files on demand.
"""
