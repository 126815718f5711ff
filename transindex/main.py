import argparse
import asyncio
import sys
from typing import List, Optional
from dotenv import load_dotenv
from rich.console import Console
from transindex.models.repository import RepositoryRecord
from transindex.models.settings import IndexSettings
from transindex.probes.github import GithubProbe
from transindex.refinery.engine import filter_repositories
from transindex.renderer.document import update_document
from transindex.renderer.engine import format_repositories_table

console = Console()
err_console = Console(stderr=True)

async def run(settings: IndexSettings, probe: Optional[GithubProbe] = None, dry_run: bool = False) -> str:
    """
    Lists the organization, resolves every repository, probes translation
    status and rewrites the index document. Returns the new document text.
    """
    probe = probe or GithubProbe(settings)
    async with probe:
        console.print("[bold blue]Fetching repositories from the GitHub API...[/bold blue]")
        repos = await probe.get_organization_repositories()
        console.print(f"Found {len(repos)} repositories")

        # All details at once; one failure fails the run.
        details: List[RepositoryRecord] = await asyncio.gather(
            *(probe.get_repository_details(repo["name"]) for repo in repos)
        )

        # Probes stay sequential to keep the request rate down.
        console.print("Checking translation status for each repository...")
        for repo in details:
            repo.is_translated = await probe.check_translation_cache(repo.name)
            console.print(f"  {repo.name}: {'Translated' if repo.is_translated else 'Not translated'}")

    filtered = filter_repositories(details, settings.excluded_repos)
    console.print(f"Filtered to {len(filtered)} repositories")

    table_content = format_repositories_table(filtered)
    return update_document(table_content, settings, dry_run=dry_run)

def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Regenerate the translation index table")
    parser.add_argument("--readme", help="Markdown document to update (default: README.md beside the project)", default=None)
    parser.add_argument("--org", help="GitHub organization to index", default=None)
    parser.add_argument("--dry-run", action="store_true", help="Render the document without writing it")

    args = parser.parse_args(argv)

    load_dotenv()
    settings = IndexSettings.from_env(readme_path=args.readme, organization=args.org)
    if not settings.token:
        err_console.print("[yellow]No API_KEY set; requests will be unauthenticated.[/yellow]")

    try:
        asyncio.run(run(settings, dry_run=args.dry_run))
    except Exception as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

if __name__ == "__main__":
    main()
