"""Fetch-and-aggregate pipeline behind ``opencli dbcluster describe``."""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

import typer
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from ...config import Config
from ...utils.kube import ClusterResourceClient, api_error_message, current_namespace, load_kubeconfig
from .errors import AggregateError, FetchError, LocatorError, UsageError
from .locator import locate
from .models import PlaygroundDefaults, ResourceIdentity
from .printer import SummarySink, print_cluster_info
from .projector import project

logger = logging.getLogger("dbcluster.describe")


def _stderr(message: str) -> None:
    typer.echo(message, err=True)


class ClusterDescriber:
    """Fetches located clusters one at a time and streams their summaries.

    Locator errors are soft: each distinct message is recorded once and the
    batch carries on. A failed fetch or a malformed document is hard and
    aborts the run, leaving already emitted summaries in place.

    Args:
        client: Cluster resource client offering ``get_by_name``
        defaults: Playground defaults passed to the projector
        sink: Receives each summary as soon as it is built
        namespace: Namespace the identities were located in
        all_namespaces: Whether the search spanned every namespace
        notify: Receives diagnostics such as "No resources found"
    """

    def __init__(
        self,
        client,
        defaults: PlaygroundDefaults,
        sink: SummarySink = print_cluster_info,
        namespace: str = "",
        all_namespaces: bool = False,
        notify: Callable[[str], None] = _stderr,
    ):
        self.client = client
        self.defaults = defaults
        self.sink = sink
        self.namespace = namespace
        self.all_namespaces = all_namespaces
        self.notify = notify

    def run(self, identities: Sequence[ResourceIdentity]) -> Tuple[int, Optional[AggregateError]]:
        """Describe every identity in order.

        Returns:
            Number of summaries emitted, and the aggregated soft errors or
            None when there were none

        Raises:
            FetchError: A located resource could not be fetched
            MalformedResourceError: A fetched resource could not be projected
        """
        errors: List[str] = []
        seen = set()
        emitted = 0

        for identity in identities:
            if identity.error is not None:
                if identity.error in seen:
                    continue
                seen.add(identity.error)
                errors.append(identity.error)
                continue

            try:
                document = self.client.get_by_name(identity.resource_type, identity.namespace, identity.name)
            except ApiException as e:
                logger.warning("Aborting: fetching %s/%s failed", identity.namespace, identity.name)
                raise FetchError(api_error_message(e)) from e
            except (HTTPError, OSError) as e:
                logger.warning("Aborting: fetching %s/%s failed", identity.namespace, identity.name)
                raise FetchError(str(e)) from e

            summary = project(document, self.defaults, namespace=identity.namespace, name=identity.name)
            self.sink(summary)
            emitted += 1

        if not identities and not errors:
            # nothing was written and nothing failed, so say so explicitly
            if self.all_namespaces:
                self.notify("No resources found")
            else:
                self.notify(f"No resources found in {self.namespace} namespace.")

        return emitted, AggregateError(errors) if errors else None


@dataclass
class DescribeOptions:
    """Options for one describe invocation, completed from the kubeconfig."""
    names: List[str] = field(default_factory=list)
    namespace: Optional[str] = None
    all_namespaces: bool = False
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    chunk_size: int = Config.CHUNK_SIZE
    type_hint: str = Config.DBCLUSTER_TYPE
    sink: SummarySink = print_cluster_info
    defaults: PlaygroundDefaults = field(default_factory=PlaygroundDefaults.from_config)

    enforce_namespace: bool = False
    client: Optional[ClusterResourceClient] = None

    def complete(self) -> None:
        """Resolve the namespace and build the API client.

        Raises:
            UsageError: If no cluster name was given
            LocatorError: If no cluster configuration can be loaded
        """
        if not self.names:
            raise UsageError("You must specify the database cluster name to describe.")

        kubeconfig = self.kubeconfig or Config.KUBECONFIG or None
        context = self.context or Config.KUBE_CONTEXT or None

        if self.client is None:
            try:
                load_kubeconfig(kubeconfig, context)
            except (ConfigException, FileNotFoundError) as e:
                raise LocatorError(f"unable to load cluster configuration: {e}") from e
            self.client = ClusterResourceClient()

        if self.namespace:
            self.enforce_namespace = True
        else:
            self.namespace = current_namespace(kubeconfig, context)

        if self.all_namespaces:
            self.enforce_namespace = False

    def run(self) -> Tuple[int, Optional[AggregateError]]:
        """Locate and describe the requested clusters."""
        identities = locate(
            self.client,
            namespace=self.namespace,
            all_namespaces=self.all_namespaces,
            type_hint=self.type_hint,
            names=self.names,
            chunk_size=self.chunk_size,
            enforce_namespace=self.enforce_namespace,
        )
        describer = ClusterDescriber(
            self.client,
            self.defaults,
            sink=self.sink,
            namespace=self.namespace,
            all_namespaces=self.all_namespaces,
        )
        return describer.run(identities)
