#!/usr/bin/env python3
"""CLI interface for Book Store development utilities.

Creates the database schema, issues signed access tokens for manual testing
and starts the API server.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.bookstore.core.services import (
    DbSessionService,
    JwtGenerationError,
    JwtGeneratorService,
)
from src.bookstore.runtime.context import get_config

# Initialize Rich console for colored output
console = Console()

app = typer.Typer(
    name="bookstore",
    help="Book Store API development CLI",
    rich_markup_mode="rich",
)


@app.command(name="init-db")
def init_db() -> None:
    """
    🗄️ Create all catalog tables in the configured database.
    """
    config = get_config()
    console.print(
        Panel.fit(
            "[bold blue]Initializing Database[/bold blue]",
            border_style="blue",
        )
    )

    service = DbSessionService(config)
    try:
        with console.status("[bold blue]Creating tables..."):
            service.create_all()
    finally:
        service.dispose()

    console.print(f"[green]✅ Tables created in {config.database.url}[/green]")


@app.command()
def token(
    subject: str = typer.Option(..., "--subject", "-s", help="Token subject (user id)"),
    role: list[str] = typer.Option(
        [], "--role", "-r", help="Role to grant; repeat for several"
    ),
    scope: list[str] = typer.Option(
        [], "--scope", help="Scope to grant; repeat for several"
    ),
    expires_in: int = typer.Option(3600, help="Lifetime in seconds"),
    email: Optional[str] = typer.Option(None, help="Email claim"),
) -> None:
    """
    🔑 Print a signed access token for the configured issuer and audience.

    Example: bookstore token --subject alice --role Administrator
    """
    extra_claims = {"email": email} if email else {}
    try:
        access_token = JwtGeneratorService(get_config()).generate_access_token(
            user_id=subject,
            scopes=scope,
            roles=role,
            expires_in_seconds=expires_in,
            **extra_claims,
        )
    except JwtGenerationError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from e

    summary = Table(show_header=False, box=None)
    summary.add_row("[blue]Subject[/blue]", subject)
    summary.add_row("[blue]Roles[/blue]", ", ".join(role) or "-")
    summary.add_row("[blue]Scopes[/blue]", ", ".join(scope) or "-")
    summary.add_row("[blue]Expires in[/blue]", f"{expires_in}s")
    console.print(summary, style="dim")

    # Plain print so the token can be piped
    print(access_token)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    port: Optional[int] = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Start the API server with uvicorn.
    """
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Book Store API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{bind_host}:{bind_port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.bookstore.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,  # We handle access logging in middleware
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
