"""Shared test fixtures."""

import json

import httpx
import pytest

from transindex.models.settings import IndexSettings

ORG = "Project-Translation"


def repo_payload(name, parent=None, fork=True, **extra):
    """A /repos/{org}/{name} style payload."""
    data = {
        "name": name,
        "full_name": f"{ORG}/{name}",
        "html_url": f"https://github.com/{ORG}/{name}",
        "description": f"{name} translation",
        "fork": fork,
        "stargazers_count": 1,
        "owner": {"login": ORG},
        "language": "Python",
        "topics": [],
        "default_branch": "main",
    }
    if parent is not None:
        data["parent"] = parent
    data.update(extra)
    return data


def parent_payload(full_name, description="Upstream project", stars=0, topics=None):
    owner = full_name.split("/")[0]
    return {
        "name": full_name.split("/")[1],
        "full_name": full_name,
        "html_url": f"https://github.com/{full_name}",
        "description": description,
        "stargazers_count": stars,
        "owner": {"login": owner},
        "topics": topics or [],
    }


class FakeGitHub:
    """Routes GET paths to canned (status, body) responses and records calls."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def add(self, path, body, status=200):
        self.routes[path] = (status, body)

    def handler(self, request):
        self.calls.append(request)
        status, body = self.routes.get(request.url.path, (404, {"message": "Not Found"}))
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        return httpx.Response(status, content=body.encode("utf-8"))

    def client(self):
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler),
            base_url="https://api.github.com",
        )


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def readme(tmp_path):
    path = tmp_path / "README.md"
    path.write_text(
        "# index\n\nIntro text.\n\n"
        "<!-- TABLE_START -->\n"
        "| Project | Original Repository | Description | Stars | Tags | Status |\n"
        "| --- | --- | --- | --- | --- | --- |\n"
        "| [old](x) | [a/b](y) | stale | 0 | N/A | ❌ Not Translated |\n"
        "<!-- TABLE_END -->\n\n"
        "## Contributing\n\nOpen a PR.\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def settings(readme):
    return IndexSettings(token="test-token", readme_path=readme)
