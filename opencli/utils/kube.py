"""Kubernetes access for opencli: kubeconfig loading and custom object lookups."""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

logger = logging.getLogger("opencli.kube")

DEFAULT_NAMESPACE = "default"
SERVICE_ACCOUNT_NAMESPACE = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")

# One search hit: (namespace, name, object or the per-item error)
SearchHit = Tuple[str, str, Union[Dict[str, Any], Exception]]


def _kubeconfig_content() -> Optional[Dict[str, Any]]:
    """Kubeconfig passed inline through KUBECONFIG_CONTENT, parsed in memory."""
    content = os.environ.get("KUBECONFIG_CONTENT")
    if not content:
        return None
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigException(f"KUBECONFIG_CONTENT is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigException("KUBECONFIG_CONTENT is not a kubeconfig mapping")
    return data


def load_kubeconfig(path: Optional[str] = None, context: Optional[str] = None) -> Optional[str]:
    """
    Load the kubeconfig from the KUBECONFIG_CONTENT env var, a given path,
    the default location, or the in-cluster service account, in that order.
    Returns the path actually loaded, or None when no single file was used.

    The default location is left to the kubernetes client, so a
    colon-separated $KUBECONFIG is merged the way kubectl merges it.
    In-cluster config is only tried when no context was requested.
    """
    # CI/CD secret-based loading, never written to disk
    content = _kubeconfig_content()
    if content is not None:
        config.load_kube_config_from_dict(content, context=context or None)
        return None

    if path:
        resolved = Path(os.path.expanduser(path)).resolve()
        if not resolved.exists():
            raise FileNotFoundError(f"Kubeconfig not found: {resolved}")
        config.load_kube_config(config_file=str(resolved), context=context or None)
        return str(resolved)

    try:
        config.load_kube_config(context=context or None)
        return None
    except ConfigException:
        if context:
            raise
        logger.debug("No usable kubeconfig, falling back to in-cluster config")
        config.load_incluster_config()
        return None


def _context_namespace(
    contexts: List[Dict[str, Any]],
    active: Optional[Dict[str, Any]],
    context: Optional[str],
) -> str:
    if context:
        active = next((c for c in contexts if c.get("name") == context), active)
    if not active:
        return DEFAULT_NAMESPACE
    return (active.get("context") or {}).get("namespace") or DEFAULT_NAMESPACE


def current_namespace(path: Optional[str] = None, context: Optional[str] = None) -> str:
    """Namespace of the active (or named) kubeconfig context."""
    content = _kubeconfig_content()
    if content is not None:
        contexts = content.get("contexts") or []
        current = content.get("current-context")
        active = next((c for c in contexts if c.get("name") == current), None)
        return _context_namespace(contexts, active, context)

    try:
        contexts, active = config.list_kube_config_contexts(config_file=path)
    except (ConfigException, FileNotFoundError):
        if SERVICE_ACCOUNT_NAMESPACE.exists():
            return SERVICE_ACCOUNT_NAMESPACE.read_text().strip() or DEFAULT_NAMESPACE
        return DEFAULT_NAMESPACE
    return _context_namespace(contexts, active, context)


def api_error_message(exc: ApiException) -> str:
    """Best human-readable message for an API error, preferring the Status body."""
    if exc.body:
        try:
            body = json.loads(exc.body)
        except (TypeError, ValueError):
            body = None
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
    return f"{exc.status} {exc.reason}".strip()


class ClusterResourceClient:
    """Read-only access to custom objects through CustomObjectsApi.

    Args:
        api: Preconfigured CustomObjectsApi; a default one is built when omitted
    """

    def __init__(self, api: Optional[client.CustomObjectsApi] = None):
        self._api = api or client.CustomObjectsApi()

    def get_by_name(self, resource_type, namespace: str, name: str) -> Dict[str, Any]:
        """Fetch one object. ApiException propagates to the caller."""
        logger.debug("GET %s %s/%s", resource_type.qualified_name, namespace, name)
        if not resource_type.namespaced:
            return self._api.get_cluster_custom_object(
                group=resource_type.group,
                version=resource_type.version,
                plural=resource_type.plural,
                name=name,
            )
        return self._api.get_namespaced_custom_object(
            group=resource_type.group,
            version=resource_type.version,
            namespace=namespace,
            plural=resource_type.plural,
            name=name,
        )

    def search(
        self,
        resource_type,
        namespace: Optional[str],
        names: List[str],
        chunk_size: int = 0,
    ) -> Iterator[SearchHit]:
        """Enumerate objects of one type.

        Args:
            resource_type: Type to enumerate
            namespace: Namespace constraint; None searches every namespace
            names: Specific names to look up; empty lists every object
            chunk_size: Page size for list calls, 0 to disable chunking

        Yields:
            (namespace, name, object) for every match. Per-name API errors are
            yielded in place of the object; list failures and transport errors
            are raised.
        """
        if not names:
            yield from self._list(resource_type, namespace, chunk_size)
            return

        for name in names:
            if namespace is None:
                # names are only unique per namespace, so search them all
                hits = list(self._list(
                    resource_type, None, chunk_size,
                    field_selector=f"metadata.name={name}",
                ))
                if not hits:
                    yield "", name, LookupError(f'{resource_type.qualified_name} "{name}" not found')
                yield from hits
                continue
            try:
                obj = self.get_by_name(resource_type, namespace, name)
            except ApiException as e:
                yield namespace, name, e
                continue
            metadata = obj.get("metadata") or {}
            yield metadata.get("namespace", namespace), metadata.get("name", name), obj

    def _list(
        self,
        resource_type,
        namespace: Optional[str],
        chunk_size: int,
        field_selector: Optional[str] = None,
    ) -> Iterator[SearchHit]:
        kwargs: Dict[str, Any] = {}
        if chunk_size:
            kwargs["limit"] = chunk_size
        if field_selector:
            kwargs["field_selector"] = field_selector

        token = None
        while True:
            if token:
                kwargs["_continue"] = token
            logger.debug("LIST %s namespace=%s %s", resource_type.qualified_name, namespace, kwargs)
            if namespace is None or not resource_type.namespaced:
                page = self._api.list_cluster_custom_object(
                    group=resource_type.group,
                    version=resource_type.version,
                    plural=resource_type.plural,
                    **kwargs,
                )
            else:
                page = self._api.list_namespaced_custom_object(
                    group=resource_type.group,
                    version=resource_type.version,
                    namespace=namespace,
                    plural=resource_type.plural,
                    **kwargs,
                )
            for item in _flatten(page.get("items") or []):
                metadata = item.get("metadata") if isinstance(item, dict) else None
                if not isinstance(metadata, dict) or not metadata.get("name"):
                    yield namespace or "", "", ValueError("object has no metadata.name")
                    continue
                yield metadata.get("namespace", namespace or ""), metadata["name"], item
            token = (page.get("metadata") or {}).get("continue")
            if not token:
                break


def _flatten(items: List[Any]) -> Iterator[Any]:
    """Expand nested ``*List`` objects into their items, preserving order."""
    for item in items:
        if (
            isinstance(item, dict)
            and str(item.get("kind", "")).endswith("List")
            and isinstance(item.get("items"), list)
        ):
            yield from _flatten(item["items"])
        else:
            yield item
