"""
wabridge CLI main module.

Runs the gateway under uvicorn for development and production workflows.
"""

import subprocess
import sys

import typer

from wabridge.core.config.settings import settings

app = typer.Typer(help="WhatsApp REST bridge CLI")

APP_FACTORY = "wabridge.core.app:create_app"


def _build_uvicorn_command(host: str, port: int, *extra: str) -> list[str]:
    return [
        sys.executable,
        "-m",
        "uvicorn",
        APP_FACTORY,
        "--factory",
        "--host",
        host,
        "--port",
        str(port),
        *extra,
    ]


def _run_server(cmd: list[str], label: str, port: int) -> None:
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        typer.echo(
            f"{label} server failed to start (exit code: {e.returncode})", err=True
        )
        typer.echo("", err=True)
        typer.echo("Common issues:", err=True)
        typer.echo(f"• Port {port} already in use (try --port)", err=True)
        typer.echo("• Invalid LOG_LEVEL or DATABASE_URL in .env", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo(f"{label} server stopped")


@app.command()
def dev(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
):
    """
    Run development server with auto-reload.

    Examples:
        wabridge dev
        wabridge dev --port 8080
    """
    cmd = _build_uvicorn_command(host, port, "--reload")

    typer.echo("Starting wabridge development server...")
    typer.echo(f"Bridge: {settings.bridge_url}")
    typer.echo(f"Server: http://{host}:{port}")
    typer.echo(f"Docs: http://{host}:{port}/docs")
    typer.echo("Press CTRL+C to stop")
    typer.echo()

    _run_server(cmd, "Development", port)


@app.command()
def run(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
    workers: int = typer.Option(
        1, "--workers", "-w", help="Number of worker processes"
    ),
):
    """
    Run production server (no auto-reload).

    Examples:
        wabridge run
        wabridge run --workers 4 --port 8080
    """
    cmd = _build_uvicorn_command(host, port, "--workers", str(workers))

    typer.echo("Starting wabridge production server...")
    typer.echo(f"Bridge: {settings.bridge_url}")
    typer.echo(f"Server: http://{host}:{port}")
    typer.echo(f"Workers: {workers}")
    typer.echo("Press CTRL+C to stop")
    typer.echo()

    _run_server(cmd, "Production", port)


if __name__ == "__main__":
    app()
