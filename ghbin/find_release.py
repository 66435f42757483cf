from dataclasses import dataclass
from typing import Optional

import requests

from ghbin.github_api import api_url, get_json, iter_pages


class RepositoryListError(Exception):
    pass


@dataclass(frozen=True)
class ReleaseCandidate:
    repo_owner: str
    repo_name: str
    asset_name: str
    download_url: Optional[str]
    asset_id: int

    def __str__(self):
        return f"{self.repo_owner}/{self.repo_name}: {self.asset_name}"


@dataclass(frozen=True)
class SearchOptions:
    target_os: str
    target_arch: str
    pattern: str = ""
    version: Optional[str] = None
    visibility: str = "private"


def list_repositories(session, visibility="private"):
    params = {'visibility': visibility}
    if visibility == "public":
        params['affiliation'] = "owner"
    return iter_pages(session, api_url("/user/repos"), params)


def resolve_release(session, owner, repo, version=None):
    """Return the release to scan for ``owner/repo``, or None to skip it.

    Without a version the latest release is used (404 when there is none).
    With a version, the first release whose tag contains it wins.
    """
    try:
        if not version:
            return get_json(session, api_url(f"/repos/{owner}/{repo}/releases/latest"))
        for release in iter_pages(session, api_url(f"/repos/{owner}/{repo}/releases")):
            if version in (release.get('tag_name') or "").lower():
                return release
        return None
    except requests.RequestException:
        return None


def match_asset(assets, target_os, target_arch):
    for asset in assets or []:
        name = (asset.get('name') or "").lower()
        if target_os in name and target_arch in name:
            return asset
    return None


def find_release_candidates(session, options):
    try:
        repos = list(list_repositories(session, options.visibility))
    except requests.RequestException as e:
        raise RepositoryListError(f"could not list repositories: {e}") from e

    candidates = []
    for repo in repos:
        repo_name = repo.get('name') or ""
        repo_owner = (repo.get('owner') or {}).get('login') or ""
        if options.pattern and options.pattern not in repo_name.lower():
            continue

        release = resolve_release(session, repo_owner, repo_name, options.version)
        if release is None:
            continue

        asset = match_asset(release.get('assets'), options.target_os, options.target_arch)
        if asset is None:
            continue
        candidates.append(ReleaseCandidate(
            repo_owner=repo_owner,
            repo_name=repo_name,
            asset_name=asset['name'],
            download_url=asset.get('browser_download_url'),
            asset_id=asset['id'],
        ))
    return candidates
