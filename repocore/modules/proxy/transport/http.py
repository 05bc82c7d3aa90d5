"""HTTP transport built on httpx."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Optional

import httpx

from repocore.modules.proxy.domain import RemoteRepository

from .base import RemoteTransport, ResourceDoesNotExistException, TransferFailedException


class HttpxTransport(RemoteTransport):
    """Streams remote files to disk with a shared ``httpx.Client``."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 30.0) -> None:
        self.log = logging.getLogger(self.__class__.__name__)
        self._client = client or httpx.Client(timeout=timeout, verify=True, follow_redirects=True)

    def close(self) -> None:
        self._client.close()

    def fetch(self, remote: RemoteRepository, path: str, destination: Path) -> None:
        url = remote.url_for(path)
        auth = None
        if remote.username and remote.password:
            auth = (remote.username, remote.password)
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + ".part")
        start_time = time.time()
        downloaded = 0
        try:
            with self._client.stream("GET", url, auth=auth, timeout=remote.timeout) as response:
                if response.status_code == 404:
                    raise ResourceDoesNotExistException(f"Resource does not exist: {url}")
                response.raise_for_status()
                with open(partial, "wb") as fh:
                    for chunk in response.iter_bytes(65536):
                        if not chunk:
                            continue
                        fh.write(chunk)
                        downloaded += len(chunk)
            os.replace(partial, destination)
        except httpx.HTTPStatusError as exc:
            raise TransferFailedException(
                f"Download failed remote={remote.id} url={url} status={exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransferFailedException(f"Download failed remote={remote.id} url={url}: {exc}") from exc
        finally:
            if partial.exists():
                partial.unlink()
        self.log.info(
            "Downloaded remote=%s url=%s -> %s (%d bytes, %.2fs)",
            remote.id,
            url,
            destination,
            downloaded,
            max(time.time() - start_time, 1e-3),
        )
