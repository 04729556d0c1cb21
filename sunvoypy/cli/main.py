"""Sunvoy CLI - Main commands."""
import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

app = typer.Typer(
    name="sunvoy",
    help="Export users and token settings from the Sunvoy challenge app",
    add_completion=False
)
console = Console()

DEFAULT_COOKIES = Path(".cookies.json")
DEFAULT_OUTPUT = Path("output") / "users.json"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )
    from sunvoypy import setup_logging
    setup_logging(level)


def render_summary(summary) -> Table:
    """Build the execution summary table."""
    def status(ok: bool, done: str = "Fetched", failed: str = "Failed") -> str:
        return f"[green]{done}[/green]" if ok else f"[red]{failed}[/red]"

    table = Table(title="Execution Summary")
    table.add_column("Step", style="cyan")
    table.add_column("Result")

    login = status(summary.login, "Success", "Fail")
    if summary.login and summary.session_reused:
        login += " [dim](session reused)[/dim]"
    table.add_row("Login", login)
    table.add_row("User List", status(summary.users_fetched))
    table.add_row("Current User", status(summary.current_user_fetched))

    output = status(summary.output_written, "Created successfully")
    if summary.output_written:
        output += f" with {summary.user_count + 1} entries ({summary.output_path})"
    table.add_row("users.json", output)
    return table


@app.command()
def run(
    output: Path = typer.Option(DEFAULT_OUTPUT, "--output", "-o", help="Result JSON file"),
    cookies: Path = typer.Option(DEFAULT_COOKIES, "--cookies", "-c", help="Cookie snapshot file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Log in (or reuse the saved session) and export users."""
    from sunvoypy import APIConfig, Credentials, SunvoyClient

    load_dotenv()
    configure_logging(verbose)

    async def do_run():
        client = None
        try:
            client = SunvoyClient(
                cookies,
                Credentials.from_env(),
                config=APIConfig.from_env()
            )
            await client.run(output)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            if client is not None:
                console.print(render_summary(client.summary))
            raise typer.Exit(1)
        finally:
            if client is not None:
                await client.close()

        console.print(render_summary(client.summary))

    run_async(do_run())


@app.command()
def logout(
    cookies: Path = typer.Option(DEFAULT_COOKIES, "--cookies", "-c", help="Cookie snapshot file"),
):
    """Delete the saved cookie snapshot."""
    from sunvoypy import JSONSession

    session = JSONSession(cookies)
    if session.exists():
        session.delete()
        console.print("[green]Logged out successfully[/green]")
    else:
        console.print("[yellow]No active session[/yellow]")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
