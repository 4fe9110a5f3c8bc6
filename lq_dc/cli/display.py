"""Rich output formatting for the lq-dc CLI.

All functions write to a :class:`rich.console.Console` (bound to *stderr*
by the app) so that ``--json`` output on *stdout* stays machine-readable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from lq_dc.license.keygen import IssuedLicense
    from lq_dc.license.license_gate import LicenseInfo


def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[red]no[/red]"


def display_issued_license(console: Console, issued: IssuedLicense) -> None:
    """Render a freshly generated license and how to use it."""
    lines = [
        f"[bold]Key:[/bold]        {issued.license_key}",
        f"[bold]Client:[/bold]     {issued.client_name} ({issued.client_id})",
        f"[bold]Issued:[/bold]     {issued.issue_date.isoformat()}",
        f"[bold]Expires:[/bold]    {issued.expiration_date.isoformat()}",
        f"[bold]Valid days:[/bold] {issued.valid_days}",
    ]
    console.print(Panel("\n".join(lines), title="License Key", border_style="blue"))
    console.print(f"Activate with: [cyan]lq_dc.license.set_key('{issued.license_key}', '{issued.client_id}')[/cyan]")
    console.print("[dim]Keep this key private; do not hard-code it in public code.[/dim]")


def display_license_info(console: Console, info: LicenseInfo) -> None:
    """Render the gate's authorization state and configuration."""
    table = Table(title="License Status", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    config = info.config
    table.add_row("Authorized", _yes_no(info.authorized))
    table.add_row("Expiration", info.expiration.isoformat() if info.expiration else "[dim](none)[/dim]")
    table.add_row("Gate enabled", _yes_no(config.enabled))
    table.add_row("Storage key", config.storage_key)
    table.add_row("Expiration period", f"{config.expiration_period.days} days")
    table.add_row(
        "Hard stop",
        config.hard_stop_timestamp.isoformat() if config.hard_stop_timestamp else "[dim](none)[/dim]",
    )
    table.add_row("Fingerprint", config.fingerprint_algorithm.value)
    console.print(table)
