import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.basehub.com/graphql"
HTTP_TIMEOUT = 30.0


class CMSQueryError(RuntimeError):
    """The CMS answered, but reported the query as failed."""


class BaseHubClient:
    """Executes GraphQL documents against the BaseHub API.

    Constructed once at startup and passed to the story functions, so tests
    can hand those functions any object with a compatible ``query`` method.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        draft: bool = False,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        if not token:
            raise ValueError("A BaseHub token is required")
        self.token = token
        self.api_url = api_url
        self.draft = draft
        self.timeout = timeout

    def headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        if self.draft:
            headers["x-basehub-draft"] = "true"
        return headers

    def query(self, document: str) -> dict:
        """POST a GraphQL document and return the response's ``data`` member."""
        logger.debug("BaseHub query: %s", document)
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.post(
                self.api_url,
                json={"query": document},
                headers=self.headers(),
            )
            resp.raise_for_status()
            body = resp.json()

        errors = body.get("errors")
        if errors:
            first = errors[0]
            message = first.get("message") if isinstance(first, dict) else str(first)
            raise CMSQueryError(f"BaseHub query failed: {message}")

        data = body.get("data")
        if data is None:
            raise CMSQueryError("BaseHub response has no data")
        return data
