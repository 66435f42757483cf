import os

import requests

from ghbin.github_api import REQUEST_TIMEOUT, api_url

CHUNK_SIZE = 8192
EXECUTABLE_MODE = 0o755


class FetchError(Exception):
    pass


class DownloadError(FetchError):
    pass


class FileCreateError(FetchError):
    pass


class WriteError(FetchError):
    pass


class PermissionChangeError(FetchError):
    pass


def download_and_prepare(session, candidate, dest_dir="."):
    """Download ``candidate`` into ``dest_dir`` under its asset name and chmod it 0755.

    A failure after the file is created leaves the partial file in place.
    """
    asset_url = api_url(
        f"/repos/{candidate.repo_owner}/{candidate.repo_name}/releases/assets/{candidate.asset_id}"
    )
    dest_path = os.path.join(dest_dir, candidate.asset_name)
    headers = {'Accept': "application/octet-stream"}

    try:
        r = session.get(asset_url, headers=headers, stream=True, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise DownloadError(f"could not download asset content: {e}") from e

    with r:
        try:
            r.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(f"could not download asset content: {e}") from e
        try:
            f = open(dest_path, 'wb')
        except OSError as e:
            raise FileCreateError(f"could not create file {dest_path}: {e}") from e
        with f:
            try:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
            except (OSError, requests.RequestException) as e:
                raise WriteError(f"could not write to file {dest_path}: {e}") from e

    try:
        os.chmod(dest_path, EXECUTABLE_MODE)
    except OSError as e:
        raise PermissionChangeError(f"could not make {dest_path} executable: {e}") from e
    return dest_path
