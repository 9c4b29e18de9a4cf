"""Persistence package for wikimanifest."""

from .yaml_store import ManifestFile, WikiGameCacheFile, YamlFile

__all__ = [
    "ManifestFile",
    "WikiGameCacheFile",
    "YamlFile",
]
