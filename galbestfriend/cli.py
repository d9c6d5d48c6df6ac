#!/usr/bin/env python3
"""
Gal Bestfriend CLI
Server management and an interactive terminal chat, built with Typer
"""

import asyncio
import colorsys
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from . import __version__
from .adapters.ai.proxy import ChatProxyClient
from .adapters.storage.file import FilePreferenceStore
from .adapters.storage.memory import MemoryPreferenceStore
from .core.config import get_settings
from .core.exceptions import GalBestfriendException, SessionBusyError, ValidationError
from .core.logging import CompanionLogger, get_logger
from .core.markdown_loader import PromptMarkdownLoader
from .domain.models.conversation import ConversationTurn
from .domain.models.profile import (
    COLOR_THEMES,
    DEFAULT_TONE_LEVEL,
    TONE_PREVIEW_TEXTS,
    Belief,
    FocusArea,
    LifeStage,
    ResponseStyle,
    Situation,
    UserProfile,
)
from .domain.models.validation import ValidationResult
from .domain.ports.storage_port import IPreferenceStore
from .domain.services.preferences import PreferenceAutosaver, PreferencePersistence
from .domain.services.session import ChatReply, ChatSession

app = typer.Typer(
    name="galbestfriend",
    help="Gal Bestfriend - emotional-support chat companion CLI",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
logger = get_logger("cli")

CHAT_HELP = (
    "[dim]/accept  /regen  /tone 1-5  /style conversational|structured|brief  "
    "/focus emotional|practical|perspective  /theme NAME  /quit[/dim]"
)


def theme_color(theme: str) -> str:
    """rich color for a color theme"""
    palette = COLOR_THEMES.get(theme, COLOR_THEMES["rose"])
    r, g, b = colorsys.hls_to_rgb(palette["h"] / 360, palette["l"] / 100, palette["s"] / 100)
    return f"rgb({round(r * 255)},{round(g * 255)},{round(b * 255)})"


def _preference_store(data_dir: str) -> IPreferenceStore:
    try:
        return FilePreferenceStore(data_dir=data_dir)
    except OSError as e:
        logger.debug(f"Data dir unavailable, preferences kept in memory: {e!r}")
        return MemoryPreferenceStore()


def _choice(label: str, enum_cls, default: str | None = None) -> str | None:
    choices = [member.value for member in enum_cls]
    if default is None:
        choices = choices + ["skip"]
        answer = Prompt.ask(label, choices=choices, default="skip", console=console)
        return None if answer == "skip" else answer
    return Prompt.ask(label, choices=choices, default=default, console=console)


def onboard(restored_theme: str) -> UserProfile:
    """Interactive onboarding"""
    console.print(Panel(
        "[bold]Hey, I'm your Gal Bestfriend.[/bold]\nLet's get to know each other.",
        border_style=theme_color(restored_theme),
    ))

    name = ""
    while not name:
        name = Prompt.ask("What should I call you?", console=console).strip()

    color_theme = Prompt.ask(
        "Pick a color mood", choices=list(COLOR_THEMES), default=restored_theme, console=console
    )
    situation = _choice("What's on your heart?", Situation, default=Situation.SELF.value)
    belief = _choice("How would you describe your beliefs?", Belief)
    life_stage = _choice("Life stage", LifeStage)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tone", justify="right", style="cyan")
    table.add_column("Sounds like", style="white")
    for level, preview in TONE_PREVIEW_TEXTS.items():
        table.add_row(str(level), preview)
    console.print(table)

    tone_level = IntPrompt.ask(
        "How should I talk to you? (1 gentle - 5 real talk)",
        choices=[str(level) for level in TONE_PREVIEW_TEXTS],
        default=DEFAULT_TONE_LEVEL,
        console=console,
    )

    return UserProfile.from_dict(
        {
            "name": name,
            "color_theme": color_theme,
            "situation": situation,
            "belief": belief,
            "life_stage": life_stage,
            "tone_level": tone_level,
            "response_style": ResponseStyle.CONVERSATIONAL.value,
            "focus_area": FocusArea.EMOTIONAL.value,
        }
    )


def _print_companion(text: str, session: ChatSession, timestamp: str) -> None:
    console.print(
        Panel(
            text,
            title="Gal Bestfriend",
            subtitle=timestamp,
            title_align="left",
            subtitle_align="right",
            border_style=theme_color(session.profile.color_theme),
        )
    )


def _print_turns(turns: list[ConversationTurn], session: ChatSession) -> None:
    for turn in turns:
        _print_companion(turn.content, session, turn.timestamp)


def _print_validation(validation: ValidationResult) -> None:
    table = Table(title="Quick check", show_header=True, header_style="bold magenta")
    table.add_column("Check", style="cyan")
    table.add_column("Result")
    for name, check in validation.checks().items():
        mark = "[green]✓[/green]" if check.passed else "[yellow]![/yellow]"
        table.add_row(name.capitalize(), f"{mark} {check.status}")
    console.print(table)
    console.print("[dim]/accept to keep it, /regen for a different take[/dim]")


def _print_reply(reply: ChatReply, session: ChatSession) -> None:
    _print_companion(reply.text, session, reply.turn.timestamp)
    if reply.validation is not None:
        _print_validation(reply.validation)


async def _handle_command(line: str, session: ChatSession) -> bool:
    """Run a slash command; returns False when the chat should end"""
    command, _, argument = line.partition(" ")
    argument = argument.strip()

    if command == "/quit":
        return False
    if command == "/accept":
        session.accept_response()
        console.print("[dim]Got it.[/dim]")
    elif command == "/regen":
        reply = await session.request_new_response()
        if reply is None:
            console.print("[dim]Nothing to redo yet.[/dim]")
        else:
            console.print(f"[dim]Tone shifted to {session.profile.tone_level}[/dim]")
            _print_reply(reply, session)
    elif command == "/tone":
        session.set_tone_level(int(argument) if argument.isdigit() else -1)
        console.print(f"[dim]Tone set to {session.profile.tone_level}[/dim]")
    elif command == "/style":
        session.set_response_style(argument)
        console.print(f"[dim]Style set to {session.profile.response_style.value}[/dim]")
    elif command == "/focus":
        session.set_focus_area(argument)
        console.print(f"[dim]Focus set to {session.profile.focus_area.value}[/dim]")
    elif command == "/theme":
        if session.set_color_theme(argument):
            console.print(f"[{theme_color(argument)}]Theme set to {COLOR_THEMES[argument]['name']}[/]")
        else:
            console.print(f"[dim]Themes: {', '.join(COLOR_THEMES)}[/dim]")
    else:
        console.print(CHAT_HELP)
    return True


async def _chat_loop(api_url: str | None, pacing: bool) -> None:
    settings = get_settings()
    companion = settings.companion.model_copy(update={"pacing_enabled": pacing})

    persistence = PreferencePersistence(_preference_store(settings.data_dir))
    restored = UserProfile()
    await persistence.restore(restored)

    profile = await asyncio.to_thread(onboard, restored.color_theme)
    await persistence.save(profile)

    proxy_url = api_url or companion.proxy_url
    handler = ChatProxyClient(proxy_url, timeout=companion.reply_timeout) if proxy_url else None
    session = ChatSession(profile=profile, settings=companion, reply_handler=handler)

    autosaver = PreferenceAutosaver(
        persistence, lambda: session.profile, interval=companion.autosave_interval
    )
    autosaver.start()

    console.print(CHAT_HELP)
    _print_turns(session.start(), session)

    try:
        while True:
            line = (await asyncio.to_thread(console.input, "[bold]You[/bold] > ")).strip()
            if not line:
                continue
            try:
                if line.startswith("/"):
                    if not await _handle_command(line, session):
                        break
                    continue
                with console.status("Thinking..."):
                    reply = await session.send_message(line)
                _print_reply(reply, session)
            except (ValidationError, SessionBusyError) as e:
                console.print(f"[yellow]{e.message}[/yellow]")
    finally:
        await autosaver.stop()
        await autosaver.save_now()
        console.print(f"[dim]Take care, {session.profile.display_name}.[/dim]")


@app.command()
def chat(
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="Chat proxy base URL (e.g. http://127.0.0.1:8000)"
    ),
    pacing: bool = typer.Option(True, help="Typing delay before local replies"),
):
    """
    Chat in the terminal
    """
    CompanionLogger.configure("WARNING")
    try:
        asyncio.run(_chat_loop(api_url, pacing))
    except (KeyboardInterrupt, EOFError):
        console.print()
    except GalBestfriendException as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def server(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload for development"),
):
    """
    Start the FastAPI server
    """
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(Panel(
        f"[bold blue]Gal Bestfriend API Server[/bold blue]\n"
        f"Running at: http://{host}:{port}\n"
        f"Docs: http://{host}:{port}/docs",
        title="Server",
    ))

    import uvicorn

    uvicorn.run(
        "galbestfriend.api.main:app",
        host=host,
        port=port,
        reload=reload,
        access_log=True,
    )


@app.command()
def prompts(
    action: str = typer.Argument("list", help="Action: list, show"),
    prompt_id: Optional[str] = typer.Option(None, help="Section ID"),
):
    """
    Inspect the LLM prompt sections
    """
    loader = PromptMarkdownLoader()

    if action == "list":
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan")
        table.add_column("Title", style="white")
        table.add_column("Chars", justify="right", style="yellow")
        for section_id, text in loader.sections.items():
            table.add_row(section_id, loader.titles.get(section_id, ""), str(len(text)))
        console.print(table)

    elif action == "show":
        if not prompt_id:
            console.print("[red]Error: --prompt-id is required[/red]")
            raise typer.Exit(1)
        if prompt_id not in loader.sections:
            console.print(f"[red]Error: prompt section '{prompt_id}' not found[/red]")
            raise typer.Exit(1)
        console.print(Panel(loader.sections[prompt_id], title=f"Prompt: {prompt_id}", border_style="blue"))

    else:
        console.print(f"[red]Error: unknown action '{action}'[/red]")
        console.print("Available: list, show")
        raise typer.Exit(1)


@app.command()
def health(
    api_url: str = typer.Option("http://127.0.0.1:8000", "--api-url", help="API base URL"),
):
    """
    Check a running API server
    """
    import requests
    from datetime import datetime

    try:
        response = requests.get(f"{api_url.rstrip('/')}/v1/health", timeout=5)
        if response.status_code == 200:
            data = response.json()
            components = ", ".join(
                f"{name}={'ok' if ok else 'down'}" for name, ok in data.get("components", {}).items()
            )
            console.print(Panel(
                f"[bold green]API server is up[/bold green]\n"
                f"Status: {data['status']}\n"
                f"Version: {data['version']}\n"
                f"Components: {components}\n"
                f"Checked at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
                title="Health check",
            ))
        else:
            console.print(f"[red]API server error: {response.status_code}[/red]")
            raise typer.Exit(1)

    except requests.exceptions.RequestException as e:
        console.print(Panel(
            f"[red]Cannot reach the API server[/red]\n"
            f"Error: {str(e)}\n"
            f"Start it with 'galbestfriend server'",
            title="Connection error",
            border_style="red",
        ))
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information
    """
    console.print(Panel(
        f"[bold blue]Gal Bestfriend[/bold blue] v{__version__}\n"
        f"Built with [bold]Typer[/bold]\n"
        f"Served by [bold]FastAPI[/bold]",
        title="Version",
    ))


if __name__ == "__main__":
    app()
