"""Downloads of the live game data: drop tables, world state and exports."""

from __future__ import annotations

import requests

DROPTABLE_URL = "https://www.warframe.com/droptables"
WORLDSTATE_URL = "https://content.warframe.com/dynamic/worldState.php"
EXPORT_URL = "https://content.warframe.com/PublicExport"
MANIFEST_URL = "https://content.warframe.com/PublicExport/Manifest"

_TIMEOUT = 60


class FetchError(Exception):
    """A download failed or returned an error status."""


def _get(url: str, what: str) -> requests.Response:
    try:
        response = requests.get(url, timeout=_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as error:
        raise FetchError(f"Sending GET request for {what}: {error}") from error
    return response


def _text(response: requests.Response, what: str) -> str:
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError as error:
        raise FetchError(f"Parsing response from {what}: {error}") from error


def fetch_droptable() -> str:
    """Download the drop table page as text."""
    return _text(_get(DROPTABLE_URL, "the droptable"), "the droptable")


def fetch_worldstate() -> str:
    """Download the world state document as text."""
    return _text(_get(WORLDSTATE_URL, "the worldstate"), "the worldstate")


def fetch_manifest(name: str) -> str:
    """Download one export manifest by its hashed file name."""
    print(f"Downloading new manifest: {name}")
    return _text(_get(f"{MANIFEST_URL}/{name}", f"manifest {name}"), f"manifest {name}")


def fetch_index() -> bytes:
    """Download the compressed manifest index."""
    return _get(f"{EXPORT_URL}/index_en.txt.lzma", "the manifest index").content