import os
import re
from typing import Dict, Iterable, List
from jinja2 import Environment, FileSystemLoader
from transindex.models.repository import RepositoryRecord
from transindex.refinery.engine import deduplicate_by_upstream, sort_by_name

TRANSLATED_BADGE = "✅ Translated"
NOT_TRANSLATED_BADGE = "❌ Not Translated"
NO_TAGS = "N/A"
TOPIC_URL = "https://github.com/topics/{topic}"

template_dir = os.path.join(os.path.dirname(__file__), 'templates')
env = Environment(loader=FileSystemLoader(template_dir))

def escape_cell(text: str) -> str:
    """
    Makes free text safe for a single markdown table cell.
    """
    return re.sub(r'\r?\n', ' ', text.replace('|', '\\|'))

def format_tags(topics: Iterable[str]) -> str:
    links = [f"[`{topic}`]({TOPIC_URL.format(topic=topic)})" for topic in topics]
    return ", ".join(links) or NO_TAGS

def build_row(repo: RepositoryRecord) -> Dict[str, str]:
    parent = repo.parent
    return {
        "name": repo.name,
        "url": repo.url,
        "upstream": parent.full_name,
        "upstream_url": parent.url,
        "description": escape_cell(parent.description or "No description"),
        "stars": str(parent.stars),
        "tags": format_tags(parent.topics),
        "status": TRANSLATED_BADGE if repo.is_translated else NOT_TRANSLATED_BADGE,
    }

def format_repositories_table(repositories: Iterable[RepositoryRecord]) -> str:
    """
    Renders the table body: one row per upstream project, sorted by fork name.
    Every row ends with a newline; no rows gives an empty string.
    """
    representatives: List[RepositoryRecord] = sort_by_name(deduplicate_by_upstream(repositories))
    template = env.get_template('table_rows.md.j2')
    return template.render(rows=[build_row(repo) for repo in representatives])
