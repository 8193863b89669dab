"""
QuickNotes — Terminal Front End
=================================

What:  A NotesView for the terminal plus a small command shell around
       NotesController.
How:   The controller hands the view the same escaped HTML fragment the web
       page shows; NotesAreaParser turns it back into rows and Rich prints
       them as a table. Form input is read with prompts.
Who:   The `quicknotes-client` console script.

Commands:
    list           reload and show all notes
    submit         fill in the form and add (or update) a note
    edit <n>       load note n into the form
    delete <n>     delete note n after confirmation
    help, quit
"""

import asyncio
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Callable, Dict, List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from quicknotes.client.api import NotesApiClient
from quicknotes.client.controller import NotesController
from quicknotes.client.render import ADD_LABEL
from quicknotes.client.state import IDLE, EditorState


@dataclass
class NoteRow:
    """One note as shown in the notes area."""
    note_id: str = ""
    title: str = ""
    content: str = ""


class NotesAreaParser(HTMLParser):
    """
    Reads a rendered notes area back into rows.

    Note cards become NoteRow entries; any other paragraph (the empty-state
    or load-error message) is collected in `messages`. Entities are decoded,
    so rows hold the note text exactly as stored.
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.rows: List[NoteRow] = []
        self.messages: List[str] = []
        self._field: Optional[str] = None
        self._depth = 0  # open <div>s inside the current note card

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        attributes = dict(attrs)
        if tag == "div":
            if self._depth:
                self._depth += 1
            elif attributes.get("class") == "note":
                self._depth = 1
                self.rows.append(NoteRow())
        elif tag == "h3" and self._depth:
            self._field = "title"
        elif tag == "p":
            self._field = "content" if self._depth else "message"
        elif tag == "button" and self._depth and attributes.get("class") == "edit-btn":
            self.rows[-1].note_id = attributes.get("data-id") or ""

    def handle_endtag(self, tag: str) -> None:
        if tag in ("h3", "p"):
            self._field = None
        elif tag == "div" and self._depth:
            self._depth -= 1

    def handle_data(self, data: str) -> None:
        if self._field == "message":
            self.messages.append(data)
        elif self._field is not None:
            row = self.rows[-1]
            setattr(row, self._field, getattr(row, self._field) + data)


def parse_notes_area(notes_html: str) -> Tuple[List[NoteRow], List[str]]:
    """Split a rendered notes area into (note rows, plain messages)."""
    parser = NotesAreaParser()
    parser.feed(notes_html)
    parser.close()
    return parser.rows, parser.messages


class TerminalView:
    """
    NotesView backed by a Rich console.

    `ask` reads one line of input for a prompt; it defaults to
    Console.input and is replaced by scripted answers in tests.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        ask: Optional[Callable[[str], str]] = None,
    ):
        self.console = console or Console()
        self.ask = ask or self.console.input
        self.title = ""
        self.content = ""
        self.submit_label = ADD_LABEL
        self.rows: List[NoteRow] = []

    def read_form(self) -> Tuple[str, str]:
        """Prompt for both fields; an empty answer keeps what the form holds."""
        title = self.ask(self._prompt("Title", self.title)) or self.title
        content = self.ask(self._prompt("Content", self.content)) or self.content
        return title, content

    def fill_form(self, title: str, content: str) -> None:
        self.title = title
        self.content = content

    def set_submit_label(self, label: str) -> None:
        self.submit_label = label

    def show_notes(self, notes_html: str) -> None:
        self.rows, messages = parse_notes_area(notes_html)
        if not self.rows:
            self.console.print(escape(" ".join(messages)))
            return

        table = Table(show_header=True)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Title", style="bold")
        table.add_column("Content")
        for number, row in enumerate(self.rows, start=1):
            table.add_row(str(number), escape(row.title), escape(row.content))
        self.console.print(table)

    def confirm(self, prompt: str) -> bool:
        answer = self.ask(f"{escape(prompt)} (y/N) ")
        return answer.strip().lower() in ("y", "yes")

    @staticmethod
    def _prompt(name: str, current: str) -> str:
        if current:
            return f"{name} ({escape(current)}): "
        return f"{name}: "


class NotesShell:
    """
    Read-eval loop that maps typed commands onto controller handlers.

    The editor state lives here and is threaded through every handler call.
    """

    def __init__(self, controller: NotesController, view: TerminalView):
        self.controller = controller
        self.view = view
        self.state: EditorState = IDLE
        self.running = False
        self.commands: Dict[str, Callable] = {
            "list": self._cmd_list,
            "submit": self._cmd_submit,
            "edit": self._cmd_edit,
            "delete": self._cmd_delete,
            "help": self._cmd_help,
            "quit": self._cmd_quit,
            "exit": self._cmd_quit,
        }

    async def run(self) -> None:
        self.running = True
        self.view.console.print(Panel(
            "[bold]QuickNotes[/bold]\n"
            "Type [cyan]help[/cyan] for available commands, [cyan]quit[/cyan] to exit.",
        ))
        await self.controller.load()

        while self.running:
            try:
                line = self.view.ask(f"[bold cyan]{self.view.submit_label} >[/bold cyan] ")
            except (EOFError, KeyboardInterrupt):
                break
            await self.handle(line)

    async def handle(self, line: str) -> None:
        parts = line.split()
        if not parts:
            return
        command, args = parts[0].lower(), parts[1:]
        handler = self.commands.get(command)
        if handler is None:
            self.view.console.print(f"[red]Unknown command: {command}[/red]")
            return
        await handler(args)

    async def _cmd_list(self, args: List[str]) -> None:
        await self.controller.load()

    async def _cmd_submit(self, args: List[str]) -> None:
        self.state = await self.controller.submit(self.state)

    async def _cmd_edit(self, args: List[str]) -> None:
        note_id = self._pick(args)
        if note_id is not None:
            self.state = self.controller.edit(self.state, note_id)

    async def _cmd_delete(self, args: List[str]) -> None:
        note_id = self._pick(args)
        if note_id is not None:
            self.state = await self.controller.delete(self.state, note_id)

    async def _cmd_help(self, args: List[str]) -> None:
        table = Table(title="Available Commands", show_header=True)
        table.add_column("Command", style="cyan")
        table.add_column("Description")
        table.add_row("list", "Reload and show all notes")
        table.add_row("submit", f"{self.view.submit_label} from the form")
        table.add_row("edit <n>", "Load note n into the form")
        table.add_row("delete <n>", "Delete note n")
        table.add_row("quit / exit", "Exit the shell")
        self.view.console.print(table)

    async def _cmd_quit(self, args: List[str]) -> None:
        self.running = False

    def _pick(self, args: List[str]) -> Optional[str]:
        """Map a 1-based row number from the last listing to a note id."""
        if len(args) == 1 and args[0].isdigit() and 1 <= int(args[0]) <= len(self.view.rows):
            return self.view.rows[int(args[0]) - 1].note_id
        self.view.console.print(f"[red]Pick a note number between 1 and {len(self.view.rows)}[/red]")
        return None


app = typer.Typer(help="Terminal client for a QuickNotes server.", add_completion=False)


@app.command()
def main(
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Server origin (default: API_BASE_URL setting)"
    ),
) -> None:
    """Open an interactive notes shell against a running server."""
    asyncio.run(_run(base_url))


async def _run(base_url: Optional[str]) -> None:
    api = NotesApiClient.for_origin(base_url)
    view = TerminalView()
    try:
        await NotesShell(NotesController(api, view), view).run()
    finally:
        await api.aclose()
