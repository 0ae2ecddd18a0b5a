"""Docker-managed local Elasticsearch commands."""

from __future__ import annotations

import shutil
import subprocess
import time
from typing import Annotated

import typer
from rich.console import Console

engine_app = typer.Typer(help="Manage the local Elasticsearch container.")
console = Console()

_CONTAINER_NAME = "deep-pagination-es"
_IMAGE = "docker.elastic.co/elasticsearch/elasticsearch:8.15.3"
_HEALTH_CMD = "curl -sf 'http://localhost:9200/_cluster/health?wait_for_status=yellow&timeout=1s'"


def _docker_available() -> bool:
    return shutil.which("docker") is not None


def _require_docker() -> None:
    if not _docker_available():
        console.print("[red]The docker CLI was not found on PATH.[/red]")
        raise typer.Exit(1)


def _inspect(template: str) -> str | None:
    result = subprocess.run(
        ["docker", "inspect", "-f", template, _CONTAINER_NAME],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def _container_state() -> str | None:
    """Docker state of the container, or None when it does not exist."""
    return _inspect("{{.State.Status}}")


def _health_status() -> str | None:
    """Docker health of the container: 'starting', 'healthy' or 'unhealthy'."""
    return _inspect("{{if .State.Health}}{{.State.Health.Status}}{{end}}") or None


def _wait_for_ready(timeout: int = 120) -> bool:
    """Poll the container health check until the cluster is at least yellow."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        health = _health_status()
        if health == "healthy":
            return True
        if health is None and _container_state() != "running":
            return False
        time.sleep(2)
    return False


def _run_args(port: int, heap: str) -> list[str]:
    return [
        "docker",
        "run",
        "-d",
        "--name",
        _CONTAINER_NAME,
        "-p",
        f"{port}:9200",
        "-e",
        "discovery.type=single-node",
        "-e",
        "xpack.security.enabled=false",
        "-e",
        f"ES_JAVA_OPTS=-Xms{heap} -Xmx{heap}",
        "--health-cmd",
        _HEALTH_CMD,
        "--health-interval",
        "2s",
        "--health-retries",
        "60",
        _IMAGE,
    ]


@engine_app.command("start")
def start(
    port: Annotated[int, typer.Option(help="Host port mapped to 9200.")] = 9200,
    heap: Annotated[str, typer.Option(help="JVM heap size, e.g. 512m or 1g.")] = "512m",
) -> None:
    """Start a single-node Elasticsearch with security disabled."""
    _require_docker()
    state = _container_state()
    if state == "running":
        console.print(f"[green]{_CONTAINER_NAME} already running; nothing to do.[/green]")
        return
    if state is None:
        subprocess.run(_run_args(port, heap), check=True)
    else:
        subprocess.run(["docker", "start", _CONTAINER_NAME], check=True)

    console.print("Waiting for cluster health...")
    if not _wait_for_ready():
        console.print("[red]Elasticsearch did not become healthy; see `docker logs deep-pagination-es`.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Elasticsearch ready on http://localhost:{port}[/green]")
    console.print(f"Set ELASTICSEARCH_HOST=http://localhost:{port} to use it.")


@engine_app.command("stop")
def stop() -> None:
    """Remove the Elasticsearch container and its data."""
    _require_docker()
    if _container_state() is None:
        console.print(f"No {_CONTAINER_NAME} container to remove.")
        return
    subprocess.run(["docker", "rm", "-f", _CONTAINER_NAME], check=True, capture_output=True)
    console.print("[green]Container removed.[/green]")


@engine_app.command("status")
def status() -> None:
    """Show container state and cluster health."""
    _require_docker()
    state = _container_state()
    if state is None:
        console.print(f"{_CONTAINER_NAME}: [yellow]not found[/yellow]")
        return
    health = _health_status() or "unknown"
    colour = "green" if health == "healthy" else "yellow"
    console.print(f"{_CONTAINER_NAME}: {state}, health [{colour}]{health}[/{colour}]")
