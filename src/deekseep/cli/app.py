"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..chat import DEFAULT_GREETING, Transcript, TurnController
from ..llm import AVAILABLE_MODELS, resolve_model_id
from ..rendering import segment_math
from ..ui.formatting import render_content
from .providers import get_client, get_settings, has_credentials, require_credentials

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="deekseep",
    help="Chat with DeepSeek from the terminal, with Markdown and LaTeX rendering",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

MODEL_OPTION = typer.Option(None, "--model", "-m", help="UI model label (see 'deekseep models')")
TEMPERATURE_OPTION = typer.Option(None, "--temperature", "-t", help="Sampling temperature (0.0-1.0)")
MAX_TOKENS_OPTION = typer.Option(None, "--max-tokens", help="Maximum reply tokens")
TIMEOUT_OPTION = typer.Option(None, "--timeout", help="Request deadline in seconds")
MARKDOWN_OPTION = typer.Option(None, "--markdown/--no-markdown", help="Render replies as Markdown")


def _print_reply(content: str, use_markdown: bool, render_math: bool) -> None:
    console.print("[bold green]Assistant:[/bold green]")
    for renderable in render_content(content, use_markdown, render_math):
        console.print(renderable)
    console.print()


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    model: str | None = MODEL_OPTION,
    temperature: float | None = TEMPERATURE_OPTION,
    max_tokens: int | None = MAX_TOKENS_OPTION,
    timeout: float | None = TIMEOUT_OPTION,
    markdown: bool | None = MARKDOWN_OPTION,
):
    """Send a single message and print the reply."""
    settings = get_settings(
        model_label=model,
        temperature=temperature,
        max_tokens=max_tokens,
        request_timeout=timeout,
        use_markdown_renderer=markdown,
    )
    require_credentials(settings, console)

    async def _ask():
        client = get_client()
        try:
            controller = TurnController(client, settings)
            reply = await controller.submit(prompt)
        finally:
            await client.close()

        if reply is None:
            console.print("[yellow]Nothing to send[/yellow]")
            raise typer.Exit(code=1)

        current = settings.load()
        _print_reply(reply.content, current.use_markdown_renderer, current.render_math_in_markdown)

        result = controller.last_result
        if result is not None and not result.is_success:
            raise typer.Exit(code=1)

    asyncio.run(_ask())


@app.command()
def chat(
    model: str | None = MODEL_OPTION,
    temperature: float | None = TEMPERATURE_OPTION,
    max_tokens: int | None = MAX_TOKENS_OPTION,
    timeout: float | None = TIMEOUT_OPTION,
    markdown: bool | None = MARKDOWN_OPTION,
):
    """Interactive chat mode in the console."""
    settings = get_settings(
        model_label=model,
        temperature=temperature,
        max_tokens=max_tokens,
        request_timeout=timeout,
        use_markdown_renderer=markdown,
    )
    require_credentials(settings, console)

    async def _chat():
        client = get_client()
        transcript = Transcript.with_greeting()
        controller = TurnController(client, settings, transcript)

        try:
            console.print("[bold cyan]Deekseep Interactive Chat[/bold cyan]")
            console.print(f"[dim]Model: {settings.load().model_label}[/dim]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")
            console.print(f"[bold green]Assistant:[/bold green] {DEFAULT_GREETING}\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")

                    if not user_input.strip():
                        continue

                    if user_input.strip().lower() in ('exit', 'quit', 'q'):
                        console.print("[dim]Goodbye![/dim]")
                        break

                    with console.status("[dim]Sending...[/dim]"):
                        reply = await controller.submit(user_input)

                    if reply is not None:
                        current = settings.load()
                        _print_reply(
                            reply.content,
                            current.use_markdown_renderer,
                            current.render_math_in_markdown,
                        )

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            import traceback
            console.print(f"[dim]{traceback.format_exc()}[/dim]")
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    model: str | None = MODEL_OPTION,
    temperature: float | None = TEMPERATURE_OPTION,
    max_tokens: int | None = MAX_TOKENS_OPTION,
    timeout: float | None = TIMEOUT_OPTION,
    markdown: bool | None = MARKDOWN_OPTION,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    settings = get_settings(
        model_label=model,
        temperature=temperature,
        max_tokens=max_tokens,
        request_timeout=timeout,
        use_markdown_renderer=markdown,
    )
    require_credentials(settings, console)

    async def _tui():
        from ..ui import run_textual_tui

        client = get_client()
        try:
            await run_textual_tui(
                client=client, settings=settings, log_level=log_level, timeout=timeout
            )
        finally:
            await client.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def models():
    """List available models and their provider identifiers."""
    current = get_settings().load().model_label

    table = Table(title="Available Models")
    table.add_column("Label", style="cyan")
    table.add_column("Provider model", style="green")
    table.add_column("Selected", justify="center")

    for label in AVAILABLE_MODELS:
        table.add_row(label, resolve_model_id(label), "*" if label == current else "")

    console.print(table)


@app.command()
def segments(
    text: str = typer.Argument(..., help="Text to split into text and math segments"),
):
    """Show how a reply is split into text and math segments."""
    table = Table(title="Segments")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind", style="cyan")
    table.add_column("Style", style="magenta")
    table.add_column("Payload", style="white")

    for index, segment in enumerate(segment_math(text), 1):
        table.add_row(str(index), segment.kind.value, segment.math_style.value, repr(segment.payload))

    console.print(table)


@app.command()
def health():
    """Check configuration and credentials."""
    try:
        settings = get_settings()
        current = settings.load()
    except Exception as e:
        console.print(f"[red]x[/red] Settings: INVALID ({e})")
        raise typer.Exit(code=1)

    console.print("[green]+[/green] Settings: OK")
    console.print(f"[dim]  Model: {current.model_label} -> {resolve_model_id(current.model_label)}[/dim]")

    if has_credentials(settings):
        console.print("[green]+[/green] API key: SET")
    else:
        console.print("[yellow]![/yellow] API key: NOT SET")
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the deekseep command."""
    app()

