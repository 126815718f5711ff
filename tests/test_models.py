import pytest
from pydantic import ValidationError

from conftest import parent_payload, repo_payload
from transindex.models.repository import RepositoryRecord
from transindex.models.settings import IndexSettings


def test_record_prefers_fresh_parent_payload():
    embedded = parent_payload("upstream/foo", description="old text", stars=3)
    fresh = parent_payload("upstream/foo", description="new text", stars=10, topics=["cli"])

    record = RepositoryRecord.from_api(repo_payload("proj-a", parent=embedded), fresh)

    assert record.is_fork
    assert record.is_translated is False
    assert record.parent.full_name == "upstream/foo"
    assert record.parent.owner == "upstream"
    assert record.parent.description == "new text"
    assert record.parent.stars == 10
    assert record.parent.topics == ["cli"]


def test_record_falls_back_to_embedded_parent_summary():
    embedded = parent_payload("upstream/foo", description="embedded", stars=4, topics=["ignored"])

    record = RepositoryRecord.from_api(repo_payload("proj-a", parent=embedded))

    assert record.parent.description == "embedded"
    assert record.parent.stars == 4
    assert record.parent.topics == []


def test_record_defaults_when_everything_is_missing():
    embedded = parent_payload("upstream/foo", description=None)
    del embedded["stargazers_count"]
    data = repo_payload("proj-a", parent=embedded, description=None, topics=None, language=None)

    record = RepositoryRecord.from_api(data)

    assert record.description == "No description"
    assert record.topics == []
    assert record.language is None
    assert record.parent.description == "No description"
    assert record.parent.stars == 0


def test_fresh_parent_zero_stars_wins():
    embedded = parent_payload("upstream/foo", stars=7)
    fresh = parent_payload("upstream/foo", stars=0)

    record = RepositoryRecord.from_api(repo_payload("proj-a", parent=embedded), fresh)

    assert record.parent.stars == 0


def test_non_fork_has_no_parent():
    record = RepositoryRecord.from_api(repo_payload("index", fork=False))
    assert record.is_fork is False
    assert record.parent is None


def test_settings_are_frozen_and_build_headers(tmp_path):
    settings = IndexSettings(token="abc", readme_path=tmp_path / "README.md")

    assert settings.headers == {
        "User-Agent": "Project-Translation-Index-Generator",
        "Accept": "application/vnd.github.v3+json",
        "Authorization": "Bearer abc",
    }
    with pytest.raises(ValidationError):
        settings.organization = "other"


def test_settings_without_token_send_no_authorization():
    assert "Authorization" not in IndexSettings().headers


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("API_KEY", "from-env")

    settings = IndexSettings.from_env(readme_path=str(tmp_path / "DOC.md"), organization="Acme")

    assert settings.token == "from-env"
    assert settings.organization == "Acme"
    assert settings.readme_path == (tmp_path / "DOC.md").resolve()
    assert settings.excluded_repos == frozenset({"index"})
