"""GitHub-hosted template source.

Two GitHub endpoints are used: the contents API, to probe whether a
``templates/...`` subtree exists and to list template directories, and the
zipball endpoint, to fetch the whole repository once per process.
"""

from __future__ import annotations

import logging
import shutil
import ssl
import tempfile
import zipfile
from enum import Enum
from pathlib import Path
from typing import Any

import httpx
import truststore

from yehle.core.config import Settings, parse_repo_slug

from .errors import InvalidRemoteResponse, RemoteApiError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
DOWNLOAD_TIMEOUT = 60
CHUNK_SIZE = 8192


class ProbeResult(Enum):
    EXISTS = "exists"
    MISSING = "missing"
    UNKNOWN = "unknown"


def build_client() -> httpx.Client:
    ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    return httpx.Client(verify=ssl_context, follow_redirects=True)


def _describes_directory(payload: Any) -> bool:
    if isinstance(payload, list):
        return True
    return isinstance(payload, dict) and payload.get("type") == "dir"


class GitHubTemplateSource:
    """Reads templates from ``settings.templates_repo`` at ``settings.templates_ref``."""

    def __init__(
        self,
        settings: Settings,
        client: httpx.Client | None = None,
        cache_dir: Path | None = None,
    ) -> None:
        self.owner, self.repo = parse_repo_slug(settings.templates_repo)
        self.ref = settings.templates_ref
        self.api_base_url = settings.api_base_url.rstrip("/")
        self._token = settings.github_token
        self._client = client
        self._owns_client = client is None
        self._cache_dir = cache_dir
        self._owns_cache_dir = cache_dir is None
        self._downloaded_root: Path | None = None

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = build_client()
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def contents_url(self, path: str) -> str:
        return f"{self.api_base_url}/repos/{self.owner}/{self.repo}/contents/{path}?ref={self.ref}"

    def archive_url(self) -> str:
        return f"{self.api_base_url}/repos/{self.owner}/{self.repo}/zipball/{self.ref}"

    # ------------------------------------------------------------------
    # Contents API
    # ------------------------------------------------------------------

    def probe(self, path: str) -> ProbeResult:
        """Ask the contents API whether ``path`` is a directory.

        Only a 404 or a successful non-directory answer count as MISSING. Any
        other status and any transport error leave the question open.
        """
        url = self.contents_url(path)
        try:
            response = self.client.get(url, headers=self._headers(), timeout=REQUEST_TIMEOUT, follow_redirects=True)
        except httpx.HTTPError as exc:
            logger.debug("Probe of %s failed: %s", url, exc)
            return ProbeResult.UNKNOWN

        if response.status_code == 404:
            return ProbeResult.MISSING
        if not response.is_success:
            logger.debug("Probe of %s returned %s", url, response.status_code)
            return ProbeResult.UNKNOWN
        try:
            payload = response.json()
        except ValueError:
            return ProbeResult.MISSING
        return ProbeResult.EXISTS if _describes_directory(payload) else ProbeResult.MISSING

    def list_directory(self, path: str) -> list[dict[str, Any]]:
        url = self.contents_url(path)
        try:
            response = self.client.get(url, headers=self._headers(), timeout=REQUEST_TIMEOUT, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise RemoteApiError(url, reason=str(exc)) from exc

        if not response.is_success:
            raise RemoteApiError(url, status_code=response.status_code, reason=response.reason_phrase)
        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidRemoteResponse(url) from exc
        if not isinstance(payload, list):
            raise InvalidRemoteResponse(url)
        return [entry for entry in payload if isinstance(entry, dict)]

    # ------------------------------------------------------------------
    # Archive download
    # ------------------------------------------------------------------

    def _ensure_cache_dir(self) -> Path:
        if self._cache_dir is None:
            self._cache_dir = Path(tempfile.mkdtemp(prefix="yehle-templates-"))
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        return self._cache_dir

    def download(self) -> Path:
        """Download and extract the repository archive, returning its root.

        The extracted tree is reused for every later call on this source.
        """
        if self._downloaded_root is not None and self._downloaded_root.is_dir():
            return self._downloaded_root

        cache_dir = self._ensure_cache_dir()
        zip_path = cache_dir / f"{self.repo}-{self.ref.replace('/', '-')}.zip"
        url = self.archive_url()
        logger.debug("Downloading %s -> %s", url, zip_path)

        with self.client.stream("GET", url, headers=self._headers(), timeout=DOWNLOAD_TIMEOUT, follow_redirects=True) as response:
            if response.status_code != 200:
                raise RuntimeError(f"Download of {url} failed with {response.status_code}")
            with open(zip_path, "wb") as handle:
                for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                    handle.write(chunk)

        extract_dir = cache_dir / "repo"
        if extract_dir.exists():
            shutil.rmtree(extract_dir)
        extract_dir.mkdir(parents=True)
        try:
            with zipfile.ZipFile(zip_path, "r") as zip_ref:
                zip_ref.extractall(extract_dir)
        finally:
            zip_path.unlink(missing_ok=True)

        # GitHub archives wrap everything in a single <owner>-<repo>-<sha>/ folder
        extracted_items = list(extract_dir.iterdir())
        if len(extracted_items) == 1 and extracted_items[0].is_dir():
            root = extracted_items[0]
        else:
            root = extract_dir

        self._downloaded_root = root
        logger.debug("Templates extracted to %s", root)
        return root

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
        if self._owns_cache_dir and self._cache_dir is not None:
            shutil.rmtree(self._cache_dir, ignore_errors=True)
            self._cache_dir = None
        self._downloaded_root = None

    def __enter__(self) -> "GitHubTemplateSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["GitHubTemplateSource", "ProbeResult", "build_client"]
