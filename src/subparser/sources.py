"""Sources deliver the raw plan document to a parser.

  file    FileSource     a saved export on disk
  dsb     DSBSource      the newest export published through DSBmobile
  effner  WebsiteSource  the password protected page on effner.de
"""

from enum import Enum
from pathlib import Path
from typing import Protocol

import requests

from src.subparser.config import SubparserConfig
from src.subparser.dsbmobile import RETRY_ATTEMPTS, DSBClient, retrying, send
from src.subparser.errors import (
    ConfigurationError,
    FileReadError,
    LoadingError,
    UnknownVariantError,
)
from src.subparser.logging import get_logger
from src.subparser.parsers.registry import ParserKind

logger = get_logger(__name__)


class Source(Protocol):
    def load(self) -> str: ...


class SourceKind(str, Enum):
    FILE = "file"
    DSB = "dsb"
    EFFNER = "effner"


class FileSource:
    """Reads a saved export from disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> str:
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(f"Cannot read {self.path}: {e}") from e
        logger.info("file_loaded", path=str(self.path), size=len(content))
        return content


class DSBSource:
    """Downloads the first published timetable from DSBmobile."""

    def __init__(self, client: DSBClient) -> None:
        self.client = client

    def load(self) -> str:
        self.client.login()
        documents = self.client.load_timetables()
        if not documents or not documents[0].children:
            raise LoadingError("DSBmobile has no published timetable")
        return self.client.download(documents[0].children[0])


class WebsiteSource:
    """Unlocks the substitution page on effner.de and downloads it.

    The page is a WordPress post protected by a post password: posting the
    password sets a cookie, the answer's shortlink points at the page itself.
    """

    def __init__(
        self,
        password: str,
        *,
        login_url: str,
        referer: str,
        timeout: float = 30.0,
        retry_attempts: int = RETRY_ATTEMPTS,
        session: requests.Session | None = None,
    ) -> None:
        self.password = password
        self.login_url = login_url
        self.referer = referer
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        # The session keeps the post-password cookie between both requests
        self.session = session or requests.Session()

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        return retrying(self.retry_attempts)(
            send, self.session, method, url, timeout=self.timeout, **kwargs
        )

    def load(self) -> str:
        logger.info("website_unlock_started", url=self.login_url)
        response = self._request(
            "POST",
            self.login_url,
            data={"post_password": self.password},
            headers={"Referer": self.referer},
        )

        page_url = response.links.get("shortlink", {}).get("url")
        if not page_url:
            raise LoadingError("effner.de answer has no shortlink to the plan page")

        page = self._request("GET", page_url)
        logger.info("website_loaded", url=page_url, size=len(page.text))
        return page.text


def build_source(config: SubparserConfig) -> Source:
    """Create the source selected by config.source.

    Raises:
        UnknownVariantError: If the source name is unknown.
        ConfigurationError: If the source is missing required settings.
    """
    try:
        kind = SourceKind(config.source)
    except ValueError:
        raise UnknownVariantError(
            "source", config.source, [kind.value for kind in SourceKind]
        ) from None

    if kind is SourceKind.FILE:
        if not config.input:
            raise ConfigurationError("File source requires an input file")
        return FileSource(config.input)

    if kind is SourceKind.DSB:
        if not config.dsb_user or not config.dsb_pass:
            raise ConfigurationError("DSB source requires credentials")
        return DSBSource(
            DSBClient(
                config.dsb_user,
                config.dsb_pass,
                base_url=config.dsb_base_url,
                timeout=config.request_timeout,
                retry_attempts=config.retry_attempts,
            )
        )

    if not config.effner_password:
        raise ConfigurationError("Effner source requires a password")
    if config.parser != ParserKind.EFFNER_DE.value:
        raise ConfigurationError("Effner source only works with the effner-de parser")
    return WebsiteSource(
        config.effner_password,
        login_url=config.effner_login_url,
        referer=config.effner_referer,
        timeout=config.request_timeout,
        retry_attempts=config.retry_attempts,
    )
