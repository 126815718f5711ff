import re
from pathlib import Path
from typing import Union
from rich.console import Console
from transindex.models.settings import IndexSettings

console = Console()
err_console = Console(stderr=True)

# Everything before the first table row
PREAMBLE_PATTERN = re.compile(r'^([\s\S]*?)(?=\| Project)', re.MULTILINE)

def splice_table(content: str, table_content: str, settings: IndexSettings) -> str:
    """
    Returns `content` with the table replaced.

    With both markers present (start before end) only the region between them
    changes. Otherwise the document is rebuilt from its leading prose, and any
    text after the old table header is dropped.
    """
    start_marker, end_marker = settings.start_marker, settings.end_marker
    start_index = content.find(start_marker)
    end_index = content.find(end_marker)

    if start_index == -1 or end_index == -1 or start_index >= end_index:
        err_console.print(
            "[yellow]Table markers not found, attempting fallback update.[/yellow]"
        )
        match = PREAMBLE_PATTERN.search(content)
        preamble = match.group(1).strip() if match else settings.default_preamble
        content = f"{preamble}\n\n{settings.table_header}\n{table_content}"
    else:
        section = f"{start_marker}\n{settings.table_header}\n{table_content}{end_marker}"
        content = content[:start_index] + section + content[end_index + len(end_marker):]

    return content.strip() + "\n"

def update_document(
    table_content: str,
    settings: IndexSettings,
    path: Union[str, Path, None] = None,
    dry_run: bool = False,
) -> str:
    """
    Rewrites the index document with a freshly rendered table body.
    The new text is built in memory and written in one go.
    """
    path = Path(path) if path is not None else settings.readme_path
    try:
        content = path.read_text(encoding="utf-8")
        updated = splice_table(content, table_content, settings)
        if dry_run:
            console.print(f"[dim]Dry run: {path.name} left untouched[/dim]")
            return updated
        path.write_text(updated, encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Failed to update {path.name}: {e}[/red]")
        raise

    console.print(f"[bold green]{path.name} has been updated successfully[/bold green]")
    return updated
