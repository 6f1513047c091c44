"""Vendoring manifest for the native build."""

from bldr_saucer.deps.manifest import VendorDependency, VendorManifest, load_manifest

__all__ = ["VendorDependency", "VendorManifest", "load_manifest"]
