"""Dropbox CLI - Main commands."""
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from dropboxpy import AuthSession, DropboxClient, DropboxError, TransportError, configure_logging
from dropboxpy.core.upload import FileByteSource, UploadProgress, DEFAULT_CHUNK_SIZE

app = typer.Typer(
    name="dropbox",
    help="Dropbox command line client",
    add_completion=False
)
console = Console()


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and upload progress"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Append logs to this file"),
):
    """Dropbox command line client."""
    if verbose or log_file:
        configure_logging(
            level=logging.DEBUG if verbose else logging.INFO,
            log_file=str(log_file) if log_file else None,
            enable_console=verbose
        )


# Session path: ~/.config/dropboxpy/session.yaml
def get_session_path() -> Path:
    config_dir = Path.home() / ".config" / "dropboxpy"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / "session.yaml"


def load_client(root: str) -> DropboxClient:
    """Restore the saved session or exit."""
    session_path = get_session_path()
    if not session_path.exists():
        console.print("[red]Not authorized. Run 'dropbox authorize' first.[/red]")
        raise typer.Exit(1)

    session = AuthSession.deserialize(session_path.read_text())
    if not session.is_authorized():
        console.print("[red]Session has no access token. Run 'dropbox authorize' again.[/red]")
        raise typer.Exit(1)
    return DropboxClient(session, root=root)


@app.command()
def authorize(
    app_key: str = typer.Option(..., "--app-key", "-k", envvar="DROPBOX_APP_KEY", help="Application key"),
    app_secret: str = typer.Option(..., "--app-secret", "-s", envvar="DROPBOX_APP_SECRET", help="Application secret"),
    locale: Optional[str] = typer.Option(None, "--locale", help="Locale for the authorize page"),
):
    """Authorize this application and save the session."""
    session = AuthSession(app_key, app_secret, locale=locale)

    try:
        url = session.build_authorize_url()
    except DropboxError as e:
        console.print(f"[red]Could not start authorization: {e}[/red]")
        raise typer.Exit(1)

    console.print("Visit this URL and allow access:")
    console.print(f"[cyan]{url}[/cyan]")
    typer.prompt("Press Enter when done", default="", show_default=False)

    try:
        session.exchange_for_access_token()
    except DropboxError as e:
        console.print(f"[red]Authorization failed: {e}[/red]")
        raise typer.Exit(1)

    session_path = get_session_path()
    session_path.write_text(session.serialize())
    session_path.chmod(0o600)
    console.print("[green]Authorized[/green]")
    console.print(f"Session saved to: {session_path}")


@app.command()
def logout():
    """Delete the saved session."""
    session_path = get_session_path()
    if session_path.exists():
        session_path.unlink()
        console.print("[green]Logged out successfully[/green]")
    else:
        console.print("[yellow]No active session[/yellow]")


@app.command()
def whoami(
    root: str = typer.Option("app_folder", "--root", help="app_folder or dropbox"),
):
    """Show the account the session belongs to."""
    client = load_client(root)
    try:
        info = client.account_info()
    except DropboxError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"Name: {info.get('display_name', '')}")
    console.print(f"Email: {info.get('email', '')}")
    console.print(f"User ID: {info.get('uid', '')}")


@app.command()
def ls(
    path: str = typer.Argument("/", help="Path to list"),
    long: bool = typer.Option(False, "-l", "--long", help="Long format with details"),
    root: str = typer.Option("app_folder", "--root", help="app_folder or dropbox"),
):
    """List files and folders."""
    client = load_client(root)
    try:
        meta = client.metadata(path)
    except DropboxError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    entries = meta.get('contents', [meta])
    if long:
        table = Table()
        table.add_column("Type", style="cyan")
        table.add_column("Size", justify="right")
        table.add_column("Modified")
        table.add_column("Path")

        for entry in entries:
            is_dir = entry.get('is_dir', False)
            table.add_row(
                "D" if is_dir else "F",
                "-" if is_dir else f"{entry.get('bytes', 0):,}",
                entry.get('modified', ''),
                entry.get('path', '')
            )

        console.print(table)
    else:
        for entry in entries:
            name = entry.get('path', '').rsplit('/', 1)[-1]
            if entry.get('is_dir'):
                console.print(f"[blue]{name}/[/blue]")
            else:
                console.print(name)


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    dest: str = typer.Option("/", "--dest", "-d", help="Destination folder path"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Custom file name"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing file"),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "--chunk-size", help="Chunk size in bytes"),
    retries: int = typer.Option(3, "--retries", help="Resume attempts after network errors"),
    root: str = typer.Option("app_folder", "--root", help="app_folder or dropbox"),
):
    """Upload a file with the resumable chunked protocol."""
    client = load_client(root)
    to_path = f"{dest.rstrip('/')}/{name or file_path.name}"

    with FileByteSource.open(file_path) as source:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            task = progress.add_task(f"Uploading {file_path.name}", total=100)

            def on_progress(p: UploadProgress):
                progress.update(task, completed=p.percentage)

            uploader = client.get_chunked_uploader(source, progress_callback=on_progress)
            attempt = 0
            while True:
                try:
                    uploader.upload(chunk_size)
                    break
                except TransportError as e:
                    attempt += 1
                    if attempt > retries:
                        console.print(f"[red]Upload failed at {uploader.offset:,} bytes: {e}[/red]")
                        raise typer.Exit(1)
                    console.print(f"[yellow]Network error, resuming at {uploader.offset:,} bytes[/yellow]")
                except DropboxError as e:
                    console.print(f"[red]Upload failed: {e}[/red]")
                    raise typer.Exit(1)

        try:
            result = uploader.finish(to_path, overwrite=overwrite)
        except DropboxError as e:
            console.print(f"[red]Commit failed: {e}[/red]")
            raise typer.Exit(1)

    console.print(f"[green]Uploaded:[/green] {result.get('path', to_path)}")
    console.print(f"Size: {result.get('size', '')}")
    console.print(f"Revision: {result.get('rev', '')}")


@app.command()
def download(
    remote_path: str = typer.Argument(..., help="Remote file path"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    rev: Optional[str] = typer.Option(None, "--rev", help="File revision"),
    root: str = typer.Option("app_folder", "--root", help="app_folder or dropbox"),
):
    """Download a file."""
    client = load_client(root)
    try:
        contents, meta = client.get_file_and_metadata(remote_path, rev)
    except DropboxError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    output = output or Path(remote_path.rstrip('/').rsplit('/', 1)[-1])
    output.write_bytes(contents)
    console.print(f"[green]Downloaded:[/green] {output} ({meta.get('size', len(contents))})")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
