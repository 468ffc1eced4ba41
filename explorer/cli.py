"""CLI interface for the in-memory file explorer."""

import logging
import re
import sys
from typing import Callable, Optional

import click

from .settings import settings
from .filesystem import (
    EntryKind,
    ExplorerSession,
    FileSystemError,
    SearchFactory,
    build_sample_session,
)
from .render import render_listing, render_search_results, render_tree

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.logging.level, logging.INFO),
    format=settings.logging.format,
)
logger = logging.getLogger(__name__)

# An argument is either a double-quoted string (may contain spaces) or a bare word
_ARG = r'("[^"]*"|\S+)'

COMMAND_PATTERNS = [
    ("exit", r"^(?:exit|quit|q)$"),
    ("help", r"^(?:help|\?|h)$"),
    ("clear", r"^clear$"),
    ("pwd", r"^(?:pwd|where)$"),
    ("list", rf"^(?:ls|dir|list)(?:\s+{_ARG})?$"),
    ("tree", rf"^tree(?:\s+(?:-d|--depth)\s+(\d+))?(?:\s+{_ARG})?$"),
    ("navigate", rf"^cd(?:\s+{_ARG})?$"),
    ("create_dir", rf"^(?:mkdir|md)\s+{_ARG}$"),
    ("create_file", rf"^(?:touch|mkfile)\s+{_ARG}$"),
    ("delete", rf"^(?:rm|del|delete)(\s+-f)?\s+{_ARG}$"),
    ("move", rf"^(?:mv|move)\s+{_ARG}\s+{_ARG}$"),
    ("search", rf"^(find|search|dfs|bfs)\s+(.+)$"),
]

HELP_TEXT = """Commands:
  mkdir NAME         create a folder in the current directory
  touch NAME         create a file in the current directory
  rm [-f] PATH       delete a file, or a folder with everything in it
  mv SOURCE DEST     move SOURCE into the folder DEST
  cd TARGET          '..' for parent, '/' for root, a folder name or a path
  pwd                show the current path
  ls [PATH]          list a folder
  tree [-d N] [PATH]  draw the tree (default: from root, all levels)
  find QUERY         search by name substring (default strategy)
  dfs QUERY          depth-first search
  bfs QUERY          breadth-first search
  clear              delete everything and go back to root
  help               show this help
  exit               leave the explorer
Names containing spaces can be written in double quotes."""


def _unquote(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def parse_command(line: str) -> dict | None:
    """
    Parse one line of shell input.

    Returns:
        dict with 'action' and its parameters, or None if nothing matches
    """
    # Collapse whitespace between arguments only; quoted names keep theirs
    text = " ".join(re.findall(r'"[^"]*"|\S+', line or ""))
    if not text:
        return None

    for action, pattern in COMMAND_PATTERNS:
        match = re.match(pattern, text, re.IGNORECASE)
        if not match:
            continue
        groups = match.groups()

        if action == "tree":
            depth = None if groups[0] is None else int(groups[0])
            return {"action": action, "path": _unquote(groups[1]), "depth": depth}
        if action == "list":
            return {"action": action, "path": _unquote(groups[0])}
        if action == "navigate":
            return {"action": action, "target": _unquote(groups[0]) or "/"}
        if action in ("create_dir", "create_file"):
            return {"action": action, "name": _unquote(groups[0])}
        if action == "delete":
            return {"action": action, "path": _unquote(groups[1]), "force": bool(groups[0])}
        if action == "move":
            return {"action": action, "source": _unquote(groups[0]), "dest": _unquote(groups[1])}
        if action == "search":
            verb = groups[0].lower()
            strategy = verb if verb in SearchFactory.list_strategies() else None
            return {"action": action, "query": _unquote(groups[1]), "strategy": strategy}
        return {"action": action}

    return None


def execute_command(
    session: ExplorerSession,
    cmd: dict,
    confirm: Optional[Callable[[str], bool]] = None,
) -> str:
    """
    Execute a parsed command against a session.

    Args:
        session: Session to operate on
        cmd: Command dict from parse_command
        confirm: Asked before destructive folder deletes and clear;
            None means proceed without asking

    Returns:
        Message to show the user
    """
    action = cmd.get("action")
    try:
        if action == "help":
            return HELP_TEXT

        if action == "pwd":
            return f"📍 Current path: {session.pwd()}"

        if action == "list":
            folder = session.current if cmd.get("path") is None else session.resolve(cmd["path"])
            if folder.is_file:
                return f"📄 {session.tree.full_path(folder)}"
            return "\n".join(render_listing(session.tree, folder))

        if action == "tree":
            start = None if cmd.get("path") is None else session.resolve(cmd["path"])
            return "\n".join(render_tree(
                session.tree, start=start, current=session.current, max_depth=cmd.get("depth")
            ))

        if action == "navigate":
            session.cd(cmd["target"])
            return f"✅ Changed to directory: {session.pwd()}"

        if action in ("create_dir", "create_file"):
            kind = EntryKind.FOLDER if action == "create_dir" else EntryKind.FILE
            entry = session.create(cmd["name"], kind)
            label = "Folder" if entry.is_folder else "File"
            return f"✅ {label} '{entry.name}' created successfully!"

        if action == "delete":
            entry = session.resolve(cmd["path"])
            if entry.is_folder and not cmd.get("force") and confirm is not None:
                if not confirm(f"⚠️  This will delete '{entry.name}' and all its contents. Continue?"):
                    return "❌ Deletion cancelled."
            released = session.remove_entry(entry)
            if entry.is_file:
                return f"✅ File '{entry.name}' deleted successfully!"
            return f"✅ Folder '{entry.name}' and all its contents deleted successfully! ({len(released)} entries)"

        if action == "move":
            entry = session.move(cmd["source"], cmd["dest"])
            return f"✅ '{entry.name}' moved to {session.tree.full_path(entry)}"

        if action == "search":
            strategy = cmd.get("strategy") or session.search_strategy
            hits = session.search(cmd["query"], strategy=strategy)
            return "\n".join(render_search_results(cmd["query"], hits, strategy))

        if action == "clear":
            if confirm is not None and not confirm("⚠️  Delete the whole tree?"):
                return "❌ Clear cancelled."
            released = session.reset()
            return f"🧹 Tree cleared ({released} entries removed)."

        return f"❌ Unknown action: {action}"

    except FileSystemError as e:
        logger.warning(f"{action} rejected: {e.kind}: {e.message}")
        return f"❌ Error: {e.message}"


def _print_banner():
    click.echo("╔════════════════════════════════════════╗")
    click.echo("║         FILE EXPLORER SHELL            ║")
    click.echo("║    In-memory tree, nothing on disk     ║")
    click.echo("╚════════════════════════════════════════╝")
    click.echo("Type 'help' for commands, 'exit' to quit.")


@click.group()
def cli():
    """In-memory file explorer - tree operations from the command line."""
    pass


@cli.command()
@click.option(
    "--sample",
    is_flag=True,
    help="Start with the demo tree instead of an empty root",
)
@click.option(
    "-s", "--strategy",
    type=click.Choice(SearchFactory.list_strategies()),
    default=None,
    help="Strategy used by 'find' (defaults to settings)",
)
def shell(sample, strategy):
    """Start an interactive explorer session."""
    try:
        session = ExplorerSession(search_strategy=strategy)
    except (ValueError, FileSystemError) as e:
        click.echo(f"❌ Fatal Error: Could not create root directory: {e}", err=True)
        sys.exit(1)
    if sample:
        build_sample_session(session)

    _print_banner()

    while True:
        try:
            line = input(f"\n{session.pwd()} $ ").strip()
        except (EOFError, KeyboardInterrupt):
            click.echo()
            break

        if not line:
            continue

        cmd = parse_command(line)
        if cmd is None:
            click.echo(f"❌ Unknown command: {line} (type 'help')")
            continue
        if cmd["action"] == "exit":
            break

        click.echo(execute_command(session, cmd, confirm=lambda msg: click.confirm(msg, default=False)))

    click.echo("👋 Exiting File Explorer...")
    released = session.reset()
    logger.debug(f"Released {released} entries on exit")
    click.echo("✅ Goodbye!")


@cli.command()
@click.argument("query", default="a")
def demo(query):
    """Build the sample tree and show it with both searches."""
    session = build_sample_session(ExplorerSession())
    click.echo("🌳 DIRECTORY TREE")
    click.echo("=" * 40)
    for line in render_tree(session.tree, current=session.current):
        click.echo(line)
    click.echo("=" * 40)
    for strategy in SearchFactory.list_strategies():
        hits = session.search(query, strategy=strategy)
        for line in render_search_results(query, hits, strategy):
            click.echo(line)


@cli.command()
@click.option(
    "--host",
    default=settings.api.host,
    help="Host to bind the server to",
)
@click.option(
    "--port",
    default=settings.api.port,
    type=int,
    help="Port to run the server on",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload for development",
)
def serve(host, port, reload):
    """Start the HTTP API server."""
    click.echo("🚀 Starting File Explorer API...")
    click.echo(f"   Host: {host}")
    click.echo(f"   Port: {port}")
    click.echo(f"   OpenAPI Docs: http://{host}:{port}/docs")
    click.echo()

    try:
        from .api import run_server
        run_server(host=host, port=port, reload=reload)
    except ImportError as e:
        click.echo(f"❌ API dependencies missing: {e}", err=True)
        click.echo("   Install with: pip install fastapi uvicorn", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
