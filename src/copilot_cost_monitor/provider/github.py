import httpx
import structlog

from copilot_cost_monitor.errors import (
    AuthError,
    ConfigurationError,
    NetworkError,
    NotFoundError,
    UpstreamError,
)
from copilot_cost_monitor.models import FetchOutcome, UsageReport

logger = structlog.get_logger()

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
BILLING_PRODUCT = "Copilot"


def usage_summary_url(identity: "str") -> "str":
    return f"{GITHUB_API_URL}/users/{identity}/settings/billing/usage/summary"


class GitHubBillingFetcher:
    """
    GitHubBillingFetcher implements the UsageFetcher protocol
    against GitHub's billing usage summary endpoint. It sends the
    previous ETag as If-None-Match so an unchanged report costs a
    304 instead of a full download.
    """

    def __init__(
        self,
        timeout: "float" = 10.0,
        transport: "httpx.AsyncBaseTransport | None" = None,
    ) -> "None":
        self._client: "httpx.AsyncClient" = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        )

    @property
    def name(self) -> "str":
        return "github"

    async def close(self) -> "None":
        """
        closes the underlying HTTP client.
        """
        await self._client.aclose()

    async def fetch(
        self,
        identity: "str",
        credential: "str",
        validator: "str | None" = None,
    ) -> "FetchOutcome":
        """
        fetches the Copilot usage summary for identity and returns
        its net total along with the response ETag. A 304 yields an
        outcome without a total carrying the validator that was sent.
        """
        if not credential:
            raise ConfigurationError("credential")
        if not identity:
            raise ConfigurationError("identity")

        headers: "dict[str, str]" = {"Authorization": f"Bearer {credential}"}
        if validator:
            headers["If-None-Match"] = validator

        url = usage_summary_url(identity)
        logger.debug("github_fetch_usage", url=url, conditional=bool(validator))

        try:
            resp = await self._client.get(
                url,
                params={"product": BILLING_PRODUCT},
                headers=headers,
            )
        except httpx.TransportError as exc:
            raise NetworkError(exc) from exc

        if resp.status_code == 304:
            logger.debug("github_usage_not_modified", etag=validator)
            return FetchOutcome(total=None, validator=validator)

        if resp.status_code in (401, 403):
            raise AuthError()
        if resp.status_code == 404:
            raise NotFoundError()
        if not resp.is_success:
            raise UpstreamError(resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(resp.status_code) from exc

        if not isinstance(data, dict):
            raise UpstreamError(resp.status_code)

        report = UsageReport.from_api(data)
        etag = resp.headers.get("etag")

        logger.debug(
            "github_usage_fetched",
            item_count=len(report.items),
            total=report.total,
            etag=etag,
        )
        return FetchOutcome(total=report.total, validator=etag)
