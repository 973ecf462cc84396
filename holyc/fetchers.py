"""Include fetchers.

An include fetcher is any awaitable callable ``fetch(path) -> str``. The
lexer awaits it for every ``#include`` directive and splices the returned text
into its buffer. :class:`FileFetcher` is the default used by the command line
host: it reads files relative to a base directory and downloads ``http`` and
``https`` URLs with ``httpx``.


File: fetchers.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import asyncio
import logging
import os
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class FileFetcher:
    """
    Fetch include text from the filesystem or over HTTP(S).
    """

    def __init__(self, base_dir: Optional[str] = None, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Parameters:
            base_dir (str): Directory relative paths are resolved against;
                the current working directory when omitted.
            timeout (float): Seconds to wait for a URL before giving up.
            transport (httpx.AsyncBaseTransport): Transport for URL requests;
                the default network transport when omitted.
        """
        self.base_dir = base_dir if base_dir is not None else os.getcwd()
        self.timeout = timeout
        self.transport = transport

    async def __call__(self, path: str) -> str:
        if path.startswith(('http://', 'https://')):
            return await self._download(path)
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: str) -> str:
        full_path = os.path.normpath(os.path.join(self.base_dir, path))
        logger.debug("Reading include %s", full_path)
        with open(full_path, "r", encoding="utf-8") as f:
            return f.read()

    async def _download(self, url: str) -> str:
        logger.debug("Downloading include %s", url)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
