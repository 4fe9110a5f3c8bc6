"""lq-dc CLI application -- Typer-based license tooling.

Issues and checks license keys and manages the locally persisted license.
Human-readable output goes to *stderr* via Rich; with ``--json`` a single
JSON document is written to *stdout*.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import typer
from rich.console import Console

from lq_dc.cli.display import display_issued_license, display_license_info
from lq_dc.license.fingerprint import FingerprintAlgorithm

app = typer.Typer(
    name="lq-dc",
    help="lq-dc license tooling: issue keys, validate them, manage the local license.",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Mutable global options populated by the Typer callback.
_json_output: bool = False


@app.callback()
def _global_options(
    json_mode: bool = typer.Option(
        False,
        "--json/--no-json",
        help="Emit structured JSON to stdout instead of human-readable output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log at DEBUG level.",
        envvar="LQDC_DEBUG",
    ),
) -> None:
    """Global options applied to every command."""
    global _json_output  # noqa: PLW0603
    _json_output = json_mode
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )


def _emit_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, default=str))


@app.command()
def generate(
    client_id: str | None = typer.Option(
        None,
        "--id",
        "-i",
        help="Client identifier bound into the key (defaults to the current epoch milliseconds).",
    ),
    client_name: str = typer.Option("Client", "--name", "-n", help="Client display name."),
    days: int = typer.Option(30, "--days", "-d", min=1, help="Validity in days."),
    algorithm: FingerprintAlgorithm = typer.Option(
        FingerprintAlgorithm.MD5,
        "--algorithm",
        help="Fingerprint routine; must match the gate's configuration.",
    ),
) -> None:
    """Generate a license key for a client."""
    from lq_dc.license.keygen import generate_license

    issued = generate_license(
        client_id or str(int(time.time() * 1000)),
        client_name=client_name,
        valid_days=days,
        algorithm=algorithm,
    )
    if _json_output:
        _emit_json(issued.model_dump(mode="json", by_alias=True))
        return
    display_issued_license(console, issued)


@app.command()
def validate(
    key: str = typer.Argument(..., help="License key to check."),
    client_id: str | None = typer.Option(
        None,
        "--client-id",
        "-c",
        help="Also check that the key is bound to this client.",
    ),
    algorithm: FingerprintAlgorithm = typer.Option(FingerprintAlgorithm.MD5, "--algorithm"),
) -> None:
    """Check a key's format, and its client binding when --client-id is given."""
    from lq_dc.license.keygen import validate_license_key

    valid = validate_license_key(key, client_id, algorithm=algorithm)
    if _json_output:
        _emit_json({"key": key, "client_id": client_id, "valid": valid})
    elif valid:
        console.print(f"[green]Key {key} is valid.[/green]")
    else:
        console.print(f"[red]Key {key} is invalid.[/red]")
    if not valid:
        raise typer.Exit(code=1)


@app.command()
def activate(
    key: str = typer.Argument(..., help="License key to activate."),
    client_id: str = typer.Option(..., "--client-id", "-c", help="Client the key was issued for."),
) -> None:
    """Set and persist the license key for this machine."""
    from lq_dc.license import get_license_gate

    gate = get_license_gate()
    accepted = gate.set_key(key, client_id)
    info = gate.get_info()
    if _json_output:
        _emit_json({"accepted": accepted, **info.model_dump(mode="json")})
    elif accepted:
        console.print("[green]License activated.[/green]")
        display_license_info(console, info)
    else:
        console.print("[red]License key rejected.[/red]")
    if not accepted:
        raise typer.Exit(code=1)


@app.command()
def status() -> None:
    """Show whether the library is currently authorized."""
    from lq_dc.license import get_license_gate

    info = get_license_gate().get_info()
    if _json_output:
        _emit_json(info.model_dump(mode="json"))
        return
    display_license_info(console, info)


@app.command()
def clear() -> None:
    """Remove the active and persisted license."""
    from lq_dc.license import get_license_gate

    get_license_gate().clear()
    if _json_output:
        _emit_json({"cleared": True})
        return
    console.print("License cleared.")
