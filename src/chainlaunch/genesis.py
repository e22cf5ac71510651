"""
chainlaunch/genesis.py

Genesis fetching and hashing.

A genesis can be published as a plain JSON file or as a gzipped tarball
holding a genesis.json. Either way the hash is the hex sha256 of the raw
genesis JSON bytes, which is what the coordination chain stores.

Downloads use requests in a trio worker thread so that cancelling the
surrounding scope abandons the download.
"""

import hashlib
import io
import json
import logging
import os
import tarfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests
import trio

from .config import DEFAULT_GENESIS_TIMEOUT, GENESIS_ARCHIVE_MEMBER, MAX_GENESIS_SIZE
from .errors import GenesisFetchError

logger = logging.getLogger("chainlaunch.genesis")

GZIP_MAGIC = b"\x1f\x8b"
CHUNK_SIZE = 64 * 1024


@dataclass
class Genesis:
    """A fetched genesis and its hash."""
    raw: bytes
    hash: str
    content: Dict[str, Any] = field(default_factory=dict)

    @property
    def chain_id(self) -> str:
        return str(self.content.get("chain_id", ""))


def genesis_hash(raw: bytes) -> str:
    """Hex sha256 of genesis bytes."""
    return hashlib.sha256(raw).hexdigest()


def parse_genesis(raw: bytes, source: str = "", max_size: int = MAX_GENESIS_SIZE) -> Genesis:
    """
    Validate raw genesis bytes and compute their hash.

    Args:
        raw: Genesis JSON, or a gzipped tarball containing genesis.json
        source: Where the bytes came from (for error messages)
        max_size: Largest accepted genesis.json inside an archive, in bytes

    Returns:
        Genesis

    Raises:
        GenesisFetchError: If the content is not a JSON object, or an
            archived genesis exceeds max_size
    """
    if raw.startswith(GZIP_MAGIC):
        raw = _extract_from_archive(raw, source, max_size)

    try:
        content = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise GenesisFetchError(f"invalid genesis JSON: {e}", url=source) from e

    if not isinstance(content, dict):
        raise GenesisFetchError("genesis must be a JSON object", url=source)

    return Genesis(raw=raw, hash=genesis_hash(raw), content=content)


def _extract_from_archive(data: bytes, source: str, max_size: int) -> bytes:
    too_large = f"archived genesis exceeds {max_size} bytes"
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
            for member in archive.getmembers():
                if member.isfile() and os.path.basename(member.name) == GENESIS_ARCHIVE_MEMBER:
                    if member.size > max_size:
                        raise GenesisFetchError(too_large, url=source)
                    extracted = archive.extractfile(member)
                    if extracted is not None:
                        # header size can lie; never read past the limit
                        content = extracted.read(max_size + 1)
                        if len(content) > max_size:
                            raise GenesisFetchError(too_large, url=source)
                        return content
    except (tarfile.TarError, OSError) as e:
        raise GenesisFetchError(f"invalid genesis archive: {e}", url=source) from e
    raise GenesisFetchError(f"archive has no {GENESIS_ARCHIVE_MEMBER}", url=source)


class GenesisFetcher:
    """
    Downloads a genesis over HTTP(S).

    Example:
        fetcher = GenesisFetcher(timeout=10.0)
        genesis = await fetcher.fetch("https://example.com/genesis.json")
        print(genesis.hash)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_GENESIS_TIMEOUT,
        max_size: int = MAX_GENESIS_SIZE,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: HTTP connect/read timeout in seconds
            max_size: Largest accepted download, and largest accepted
                genesis.json inside an archive, in bytes
            session: requests session to reuse (one is created if omitted)
        """
        self.timeout = timeout
        self.max_size = max_size
        self._session = session or requests.Session()

    async def fetch(self, url: str) -> Genesis:
        """
        Fetch a genesis and compute its hash.

        Raises:
            GenesisFetchError: On HTTP, size, or parse failure
        """
        logger.debug(f"Fetching genesis from {url}")
        raw = await trio.to_thread.run_sync(self._download, url, abandon_on_cancel=True)
        genesis = parse_genesis(raw, url, self.max_size)
        logger.info(f"Fetched genesis from {url} ({len(genesis.raw)} bytes, hash {genesis.hash})")
        return genesis

    def _download(self, url: str) -> bytes:
        try:
            with self._session.get(url, timeout=self.timeout, stream=True) as response:
                response.raise_for_status()
                buffer = bytearray()
                for chunk in response.iter_content(CHUNK_SIZE):
                    buffer.extend(chunk)
                    if len(buffer) > self.max_size:
                        raise GenesisFetchError(
                            f"genesis exceeds {self.max_size} bytes", url=url
                        )
                return bytes(buffer)
        except requests.RequestException as e:
            raise GenesisFetchError(f"failed to fetch genesis: {e}", url=url) from e
