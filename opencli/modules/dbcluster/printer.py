"""Output sinks for cluster summaries."""
from typing import Callable

import typer
import yaml

from .models import ClusterSummary

SummarySink = Callable[[ClusterSummary], None]

_TEXT_FIELDS = [
    ("Name", "cluster_name"),
    ("Namespace", "namespace"),
    ("Engine", "engine"),
    ("Version", "version"),
    ("Topology", "topology"),
    ("Status", "status"),
    ("Instances", "instances"),
    ("Online Instances", "online_instances"),
    ("Base Server ID", "server_id"),
    ("Storage (Gi)", "storage"),
    ("Root User", "root_user"),
    ("Port", "port"),
    ("Secret", "secret_name"),
    ("Created", "start_time"),
    ("Labels", "labels"),
]


def print_cluster_info(summary: ClusterSummary) -> None:
    """Print one summary as an aligned ``key: value`` block."""
    width = max(len(label) for label, _ in _TEXT_FIELDS) + 1
    for label, attr in _TEXT_FIELDS:
        value = getattr(summary, attr)
        line = f"{label + ':':<{width}} {value}"
        # labels end in a space by format, only pad-only lines are trimmed
        typer.echo(line if value != "" else line.rstrip())
    typer.echo("")


class YamlPrinter:
    """Emit each summary as its own YAML document."""

    def __init__(self):
        self._first = True

    def __call__(self, summary: ClusterSummary) -> None:
        if not self._first:
            typer.echo("---")
        self._first = False
        typer.echo(yaml.safe_dump(summary.to_dict(), sort_keys=False).rstrip("\n"))


def get_printer(output: str) -> SummarySink:
    if output == "yaml":
        return YamlPrinter()
    if output == "text":
        return print_cluster_info
    raise ValueError(f"unsupported output format: {output}")
