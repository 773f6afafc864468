"""Projection of raw cluster documents into flat summaries.

Documents arrive as plain nested dicts with no schema. Every required field is
read through :func:`lookup`, which either returns a value of the expected type
or raises :class:`MalformedResourceError` naming the dotted path at fault.
Nothing required is ever coerced or defaulted.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Type

from .errors import MalformedResourceError
from .models import ClusterSummary, PlaygroundDefaults

logger = logging.getLogger("dbcluster.projector")

# TODO: read the size from the cluster's persistent volume claims instead.
STORAGE_SIZE = 2

STANDALONE = "Standalone"
CLUSTER = "Cluster"

_TYPE_NAMES = {dict: "an object", str: "a string", int: "an integer"}


def _is_instance(value: Any, expected: Type) -> bool:
    # bool is an int subclass; YAML/JSON true must never pass as a count
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


def lookup(document: Mapping[str, Any], path: str, expected: Type) -> Any:
    """Return the value at a dotted path, checking its type.

    Args:
        document: Raw resource document
        path: Dotted field path, e.g. ``status.cluster.onlineInstances``
        expected: One of ``dict``, ``str`` or ``int``

    Returns:
        The value found at ``path``

    Raises:
        MalformedResourceError: If any segment is absent, or the value or an
            intermediate node has the wrong type
    """
    node: Any = document
    walked = []
    for key in path.split("."):
        parent = ".".join(walked) or "<root>"
        if not isinstance(node, dict):
            raise MalformedResourceError(parent, "is not an object")
        walked.append(key)
        if node.get(key) is None:
            raise MalformedResourceError(".".join(walked), "is missing")
        node = node[key]

    if not _is_instance(node, expected):
        raise MalformedResourceError(
            path, f"must be {_TYPE_NAMES[expected]}, got {type(node).__name__}"
        )
    return node


def format_labels(labels: Mapping[str, str]) -> str:
    """Render labels as ``key:value `` pairs in the map's iteration order."""
    return "".join(f"{key}:{value} " for key, value in labels.items())


def _labels(document: Mapping[str, Any]) -> Dict[str, str]:
    metadata = document.get("metadata")
    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise MalformedResourceError("metadata", "is not an object")
    labels = metadata.get("labels")
    if labels is None:
        return {}
    if not isinstance(labels, dict):
        raise MalformedResourceError("metadata.labels", "is not an object")
    for key, value in labels.items():
        if not isinstance(value, str):
            raise MalformedResourceError(f"metadata.labels.{key}", "must be a string")
    return labels


def project(
    document: Mapping[str, Any],
    defaults: PlaygroundDefaults,
    namespace: Optional[str] = None,
    name: Optional[str] = None,
) -> ClusterSummary:
    """Extract a ClusterSummary from a raw InnoDBCluster document.

    Args:
        document: The object as returned by the API server
        defaults: Playground connection defaults for user, port and engine
        namespace: Namespace to report; read from ``metadata`` when omitted
        name: Cluster name to report; read from ``metadata`` when omitted

    Returns:
        ClusterSummary for the document

    Raises:
        MalformedResourceError: If a required sub-tree or field is absent or
            has the wrong type
    """
    labels = _labels(document)
    lookup(document, "spec", dict)
    lookup(document, "status", dict)
    lookup(document, "status.cluster", dict)

    instances = lookup(document, "spec.instances", int)
    if instances < 1:
        raise MalformedResourceError("spec.instances", f"must be at least 1, got {instances}")

    metadata = document.get("metadata") or {}
    summary = ClusterSummary(
        namespace=namespace if namespace is not None else metadata.get("namespace", ""),
        cluster_name=name if name is not None else metadata.get("name", ""),
        root_user=defaults.root_user,
        port=defaults.port,
        engine=defaults.engine,
        version=lookup(document, "spec.version", str),
        instances=instances,
        server_id=lookup(document, "spec.baseServerId", int),
        secret_name=lookup(document, "spec.secretName", str),
        start_time=lookup(document, "status.createTime", str),
        status=lookup(document, "status.cluster.status", str),
        online_instances=lookup(document, "status.cluster.onlineInstances", int),
        topology=STANDALONE if instances == 1 else CLUSTER,
        storage=STORAGE_SIZE,
        labels=format_labels(labels),
    )
    logger.debug("Projected %s/%s (%s)", summary.namespace, summary.cluster_name, summary.topology)
    return summary
