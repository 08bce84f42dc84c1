"""DSBmobile API client.

The mobile API is a plain GET interface:
  /authid?bundleid=..&appversion=..&osversion=..&pushid&user=..&password=..
      -> "<token>" (a JSON string, "" when the credentials are wrong)
  /dsbtimetables?authid=<token>
      -> [{"Id", "Date", "Title", "Detail", "Childs": [...]}, ...]
Each child's Detail is the URL of the published HTML export.
"""

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.subparser.errors import AuthenticationError, LoadingError, TransientError
from src.subparser.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://mobileapi.dsbcontrol.de"
BUNDLE_ID = "de.heinekingmedia.dsbmobile"
APP_VERSION = "36"
OS_VERSION = "36"
RETRY_ATTEMPTS = 3
RETRY_WAIT_SECONDS = 2


class DSBDocument(BaseModel):
    """A timetable entry of the DSBmobile API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", alias="Id")
    date: str = Field(default="", alias="Date")
    title: str = Field(default="", alias="Title")
    detail: str = Field(default="", alias="Detail")
    children: list["DSBDocument"] = Field(default_factory=list, alias="Childs")


def retrying(attempts: int = RETRY_ATTEMPTS) -> Retrying:
    """Retry policy for requests: only TransientError is retried."""
    return Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(RETRY_WAIT_SECONDS),
        retry=retry_if_exception_type(TransientError),
        reraise=True,
    )


def send(
    session: requests.Session, method: str, url: str, **kwargs
) -> requests.Response:
    """Send a request and classify failures.

    Raises:
        TransientError: On connection problems, timeouts and 5xx answers.
        LoadingError: On any other non-200 answer.
    """
    try:
        response = session.request(method, url, **kwargs)
    except (requests.ConnectionError, requests.Timeout) as e:
        logger.warning("request_failed", url=url, error=str(e))
        raise TransientError(f"Request to {url} failed: {e}") from e
    except requests.RequestException as e:
        raise LoadingError(f"Request to {url} failed: {e}") from e

    if response.status_code >= 500:
        logger.warning("request_server_error", url=url, status=response.status_code)
        raise TransientError(f"{url} answered {response.status_code}")
    if response.status_code != 200:
        raise LoadingError(f"{url} answered {response.status_code}")
    return response


class DSBClient:
    """Logs in to DSBmobile and downloads published timetables."""

    def __init__(
        self,
        user: str,
        password: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        retry_attempts: int = RETRY_ATTEMPTS,
        session: requests.Session | None = None,
    ) -> None:
        self.user = user
        self.password = password
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.session = session or requests.Session()
        self.auth_token = ""

    def _get(self, url: str, params: dict[str, str] | None = None) -> requests.Response:
        return retrying(self.retry_attempts)(
            send, self.session, "GET", url, params=params, timeout=self.timeout
        )

    def login(self) -> str:
        """Obtain an auth token.

        Raises:
            AuthenticationError: If DSBmobile rejects the credentials.
        """
        logger.info("dsb_login_started", user=self.user)
        try:
            response = self._get(
                f"{self.base_url}/authid",
                params={
                    "bundleid": BUNDLE_ID,
                    "appversion": APP_VERSION,
                    "osversion": OS_VERSION,
                    "pushid": "",
                    "user": self.user,
                    "password": self.password,
                },
            )
        except LoadingError as e:
            raise AuthenticationError(f"DSB login failed: {e}") from e

        # DSBmobile reports wrong credentials as an empty token
        body = response.text.strip()
        token = body[1:-1] if len(body) >= 2 else ""
        if not token:
            logger.error("dsb_login_failed", user=self.user)
            raise AuthenticationError("DSB login failed - invalid credentials")

        self.auth_token = token
        logger.info("dsb_login_succeeded")
        return token

    def load_timetables(self) -> list[DSBDocument]:
        """List the published timetables.

        Raises:
            AuthenticationError: If login() has not succeeded yet.
            LoadingError: If the answer cannot be read.
        """
        if not self.auth_token:
            raise AuthenticationError("Not logged in")

        response = self._get(
            f"{self.base_url}/dsbtimetables", params={"authid": self.auth_token}
        )
        try:
            documents = [DSBDocument.model_validate(item) for item in response.json()]
        except (ValueError, TypeError, ValidationError) as e:
            raise LoadingError(f"Unexpected timetable listing: {e}") from e

        logger.info("dsb_timetables_loaded", documents=len(documents))
        return documents

    def download(self, document: DSBDocument) -> str:
        """Download the HTML behind a timetable entry."""
        if not document.detail:
            raise LoadingError(f"Timetable {document.title!r} has no download URL")
        response = self._get(document.detail)
        logger.info("dsb_document_downloaded", title=document.title, url=document.detail)
        return response.text
