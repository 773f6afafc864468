"""Resolution of type hints and names into concrete resource identities."""
import logging
from typing import List, Optional, Sequence

from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from ...utils.kube import api_error_message
from .errors import LocatorError
from .models import ResourceIdentity
from .resources import ResourceType, resolve_type

logger = logging.getLogger("dbcluster.locator")


def _error_message(exc: Exception, resource_type: ResourceType, name: str) -> str:
    if isinstance(exc, ApiException):
        if exc.status == 404 and not exc.body:
            return f'{resource_type.qualified_name} "{name}" not found'
        return api_error_message(exc)
    return str(exc)


def locate(
    client,
    namespace: str,
    all_namespaces: bool,
    type_hint: str,
    names: Sequence[str],
    chunk_size: int = 0,
    enforce_namespace: bool = False,
) -> List[ResourceIdentity]:
    """Enumerate the resources a describe request refers to.

    Lookups continue past per-item failures: a name that cannot be found, or
    a listed object without a name, comes back as an identity whose ``error``
    is set. The order of the result follows ``names``, or the server's list
    order when no names are given.

    Args:
        client: Cluster resource client offering ``search``
        namespace: Namespace to search in
        all_namespaces: Search every namespace, ignoring ``namespace``
        type_hint: Resource type name, e.g. ``innodbclusters`` or ``ic``
        names: Resource names; empty means every resource of the type
        chunk_size: Page size for list requests, 0 for unchunked
        enforce_namespace: Report objects outside ``namespace`` as errors

    Returns:
        Located identities, soft failures included

    Raises:
        LocatorError: If the type is unknown or the query itself fails
    """
    resource_type = resolve_type(type_hint)
    scope: Optional[str] = None if all_namespaces else namespace
    if all_namespaces:
        enforce_namespace = False

    logger.debug(
        "Locating %s %s in %s",
        resource_type.qualified_name,
        list(names) or "<all>",
        "all namespaces" if scope is None else f"namespace {scope}",
    )

    identities: List[ResourceIdentity] = []
    try:
        for item_namespace, name, result in client.search(resource_type, scope, list(names), chunk_size):
            if isinstance(result, Exception):
                message = _error_message(result, resource_type, name)
                logger.debug("Lookup of %r failed: %s", name, message)
                identities.append(ResourceIdentity(item_namespace, name, resource_type, error=message))
                continue
            if enforce_namespace and resource_type.namespaced and item_namespace != namespace:
                message = (
                    f"the namespace from the provided object \"{item_namespace}\" does not match "
                    f"the namespace \"{namespace}\". You must pass '--namespace={item_namespace}' "
                    "to perform this operation."
                )
                identities.append(ResourceIdentity(item_namespace, name, resource_type, error=message))
                continue
            identities.append(ResourceIdentity(item_namespace, name, resource_type))
    except ApiException as e:
        raise LocatorError(api_error_message(e)) from e
    except (HTTPError, OSError) as e:
        raise LocatorError(f"unable to reach the cluster: {e}") from e

    return identities
