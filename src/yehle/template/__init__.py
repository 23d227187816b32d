"""Template resolution and composition for yehle."""

from .compose import LAYER_ORDER, Layer, compose_layers, finalize_tree, package_layers
from .errors import (
    InvalidRemoteResponse,
    LocalTemplatesNotFound,
    RemoteApiError,
    RemoteDownloadFailed,
    RemoteTemplatesMissingAfterDownload,
    RemoteTemplatesNotFound,
    TemplateRegistryError,
)
from .registry import TemplateRegistry, subtree_parts
from .remote import GitHubTemplateSource, ProbeResult

__all__ = [
    "GitHubTemplateSource",
    "LAYER_ORDER",
    "InvalidRemoteResponse",
    "Layer",
    "LocalTemplatesNotFound",
    "ProbeResult",
    "RemoteApiError",
    "RemoteDownloadFailed",
    "RemoteTemplatesMissingAfterDownload",
    "RemoteTemplatesNotFound",
    "TemplateRegistry",
    "TemplateRegistryError",
    "compose_layers",
    "finalize_tree",
    "package_layers",
    "subtree_parts",
]
