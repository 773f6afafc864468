import logging
from typing import List, Optional

import typer

from opencli.config import Config
from opencli.modules.dbcluster import DescribeError, DescribeOptions
from opencli.modules.dbcluster.printer import get_printer

app = typer.Typer(help="Manage database clusters.")

logger = logging.getLogger("opencli.dbcluster")


@app.command("describe")
def describe_cluster(
    names: Optional[List[str]] = typer.Argument(None, help="Database cluster name(s)"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace to look in"),
    all_namespaces: bool = typer.Option(False, "--all-namespaces", "-A", help="Look in every namespace"),
    kubeconfig: Optional[str] = typer.Option(None, help="Path to the kubeconfig file"),
    context: Optional[str] = typer.Option(None, help="Kubeconfig context to use"),
    chunk_size: int = typer.Option(Config.CHUNK_SIZE, help="List page size, 0 to disable chunking"),
    output: str = typer.Option("text", "--output", "-o", help="Output format: text or yaml"),
):
    """Describe database cluster info."""
    try:
        Config.validate()
        options = DescribeOptions(
            names=list(names or []),
            namespace=namespace,
            all_namespaces=all_namespaces,
            kubeconfig=kubeconfig,
            context=context,
            chunk_size=chunk_size,
            sink=get_printer(output),
        )
        options.complete()
        _, errors = options.run()
    except (DescribeError, ValueError) as e:
        logger.debug("describe failed", exc_info=True)
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)

    if errors:
        typer.echo(f"error: {errors}", err=True)
        raise typer.Exit(code=1)
