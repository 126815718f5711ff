from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

NO_DESCRIPTION = "No description"

class ParentInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: str = Field(..., description="owner/name of the upstream project")
    url: str
    owner: str
    description: str = NO_DESCRIPTION
    stars: int = 0
    topics: List[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, summary: Dict[str, Any], fresh: Optional[Dict[str, Any]] = None) -> "ParentInfo":
        """
        Builds the parent from the summary embedded in a fork payload.

        `fresh` is the parent's own /repos payload when it could be fetched; its
        description, star count and topics win over the embedded summary.
        """
        fresh = fresh or {}
        stars = fresh.get("stargazers_count")
        if stars is None:
            stars = summary.get("stargazers_count")
        return cls(
            full_name=summary["full_name"],
            url=summary["html_url"],
            owner=summary["owner"]["login"],
            description=fresh.get("description") or summary.get("description") or NO_DESCRIPTION,
            stars=stars if stars is not None else 0,
            topics=fresh.get("topics") or [],
        )

class RepositoryRecord(BaseModel):
    name: str
    full_name: str
    url: str
    description: str = NO_DESCRIPTION
    is_fork: bool = False
    stars: int = 0
    owner: str
    language: Optional[str] = None
    topics: List[str] = Field(default_factory=list)
    is_translated: bool = Field(default=False, description="Set after probing for the translation cache")
    parent: Optional[ParentInfo] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any], parent_data: Optional[Dict[str, Any]] = None) -> "RepositoryRecord":
        parent = None
        if data.get("parent"):
            parent = ParentInfo.from_api(data["parent"], parent_data)
        return cls(
            name=data["name"],
            full_name=data["full_name"],
            url=data["html_url"],
            description=data.get("description") or NO_DESCRIPTION,
            is_fork=bool(data.get("fork")),
            stars=data.get("stargazers_count") or 0,
            owner=data["owner"]["login"],
            language=data.get("language"),
            topics=data.get("topics") or [],
            parent=parent,
        )
