import json
from typing import Any, Dict, List, Optional
import httpx
from rich.console import Console
from transindex.models.repository import RepositoryRecord
from transindex.models.settings import IndexSettings

console = Console()
err_console = Console(stderr=True)

class GithubProbeError(Exception):
    pass

class ApiError(GithubProbeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

class ParseError(GithubProbeError):
    pass

class GithubProbe:
    """
    Read-only client for the GitHub REST endpoints the index needs.

    Use as an async context manager. A client passed in by the caller is left
    open on exit; one created here is closed.
    """

    def __init__(self, settings: IndexSettings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "GithubProbe":
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.settings.api_base_url, timeout=None)
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GETs an API endpoint and returns the decoded JSON body.
        Anything other than 200 raises ApiError; an undecodable body raises ParseError.
        """
        if self._client is None:
            raise RuntimeError("GithubProbe must be entered before use")
        response = await self._client.get(endpoint, params=params, headers=self.settings.headers)
        if response.status_code != 200:
            raise ApiError(
                response.status_code,
                f"API request failed with status code {response.status_code}",
            )
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError("Failed to parse API response") from e

    async def get_organization_repositories(self) -> List[Dict[str, Any]]:
        # Single page only; anything past per_page is not listed.
        try:
            return await self.fetch(
                f"/orgs/{self.settings.organization}/repos",
                params={"per_page": self.settings.per_page},
            )
        except Exception as e:
            err_console.print(f"[red]Failed to fetch organization repositories: {e}[/red]")
            raise

    async def get_repository_details(self, repo_name: str) -> RepositoryRecord:
        """
        Fetches a repository and, for forks, the parent repository as well so
        that topics, description and stars reflect the upstream project.
        A failed parent fetch falls back to the summary embedded in the fork.
        """
        try:
            repo_data = await self.fetch(f"/repos/{self.settings.organization}/{repo_name}")
        except Exception as e:
            err_console.print(f"[red]Failed to fetch details for {repo_name}: {e}[/red]")
            raise

        parent_data = None
        parent = repo_data.get("parent")
        if repo_data.get("fork") and parent:
            try:
                console.print(f"  > Fetching parent details for {repo_name}: {parent['full_name']}")
                parent_data = await self.fetch(f"/repos/{parent['full_name']}")
            except (GithubProbeError, httpx.HTTPError) as e:
                err_console.print(
                    f"[yellow]Failed to fetch full parent details for {parent['full_name']}: {e}[/yellow]"
                )
        return RepositoryRecord.from_api(repo_data, parent_data)

    async def check_translation_cache(self, repo_name: str) -> bool:
        """
        True when the cache directory exists on the repository's default branch.
        Never raises for API, parse or transport errors.
        """
        base = f"/repos/{self.settings.organization}/{repo_name}"
        try:
            repo_info = await self.fetch(base)
            if not isinstance(repo_info, dict):
                raise ParseError(f"Unexpected repository payload for {repo_name}")
            default_branch = repo_info.get("default_branch") or "main"
            contents = await self.fetch(
                f"{base}/contents/{self.settings.cache_dir}",
                params={"ref": default_branch},
            )
        except ApiError as e:
            if not e.not_found:
                err_console.print(f"[yellow]Error checking {self.settings.cache_dir} for {repo_name}: {e}[/yellow]")
            return False
        except (ParseError, httpx.HTTPError) as e:
            err_console.print(f"[yellow]Error checking {self.settings.cache_dir} for {repo_name}: {e}[/yellow]")
            return False

        # Directory listings come back as arrays
        return isinstance(contents, list) or (isinstance(contents, dict) and contents.get("type") == "dir")
