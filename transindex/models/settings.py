import os
from pathlib import Path
from typing import Dict, FrozenSet, Optional
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_README_PATH = Path(__file__).resolve().parent.parent.parent / "README.md"

TABLE_HEADER = (
    "| Project | Original Repository | Description | Stars | Tags | Status |\n"
    "| --- | --- | --- | --- | --- | --- |"
)

class IndexSettings(BaseModel):
    """
    Run configuration. Built once at startup and handed to every component.
    """
    model_config = ConfigDict(frozen=True)

    organization: str = Field(default="Project-Translation", description="Organization whose repositories are indexed")
    api_base_url: str = Field(default="https://api.github.com")
    readme_path: Path = Field(default=DEFAULT_README_PATH, description="Markdown document holding the index table")
    excluded_repos: FrozenSet[str] = Field(default=frozenset({"index"}), description="Repository names never listed")
    token: Optional[str] = Field(None, description="Bearer token for the GitHub API")
    user_agent: str = "Project-Translation-Index-Generator"
    accept: str = "application/vnd.github.v3+json"
    per_page: int = 100
    cache_dir: str = Field(default=".translation-cache", description="Marker directory of a translated fork")
    start_marker: str = "<!-- TABLE_START -->"
    end_marker: str = "<!-- TABLE_END -->"
    table_header: str = TABLE_HEADER
    default_preamble: str = "# index\nIndex of translations."

    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @classmethod
    def from_env(
        cls,
        readme_path: Optional[str] = None,
        organization: Optional[str] = None,
    ) -> "IndexSettings":
        """
        Reads the token from API_KEY (or GITHUB_TOKEN) and applies CLI overrides.
        """
        overrides = {}
        if readme_path:
            overrides["readme_path"] = Path(readme_path).expanduser().resolve()
        if organization:
            overrides["organization"] = organization
        token = os.getenv("API_KEY") or os.getenv("GITHUB_TOKEN")
        return cls(token=token, **overrides)
