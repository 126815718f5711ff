from typing import Dict, Iterable, List, Tuple
from pyuca import Collator
from transindex.models.repository import RepositoryRecord

def filter_repositories(repositories: Iterable[RepositoryRecord], excluded: Iterable[str]) -> List[RepositoryRecord]:
    """
    Keeps forks that know their parent, minus the excluded names.
    """
    excluded = set(excluded)
    return [
        repo for repo in repositories
        if repo.name not in excluded and repo.is_fork and repo.parent is not None
    ]

def deduplicate_by_upstream(repositories: Iterable[RepositoryRecord]) -> List[RepositoryRecord]:
    """
    One fork per upstream project. The first fork seen in listing order wins.
    """
    groups: Dict[str, RepositoryRecord] = {}
    for repo in repositories:
        if repo.parent is None:
            continue
        groups.setdefault(repo.parent.full_name, repo)
    return list(groups.values())

collator = Collator()

def name_sort_key(name: str) -> Tuple[Tuple[int, ...], str]:
    # Unicode collation: punctuation before digits before letters, lowercase first.
    return (collator.sort_key(name), name)

def sort_by_name(repositories: Iterable[RepositoryRecord]) -> List[RepositoryRecord]:
    return sorted(repositories, key=lambda repo: name_sort_key(repo.name))
