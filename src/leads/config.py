"""Configuration for the Notion lead integration using pydantic-settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.notion.client import NOTION_VERSION, REQUEST_TIMEOUT, NotionClient
from src.paths import ENV_FILE


class LeadsConfig(BaseSettings):
    """Configuration for the Notion lead integration.

    All settings are loaded from environment variables with the NOTION_ prefix.

    :param integration_secret: Notion integration token.
    :param version: Notion-Version header sent with every request.
    :param base_url: Notion API host.
    :param request_timeout: Request timeout in seconds.
    :param id_property: Name of the database property holding the lead ID.
    :param database_id: Default lead database, used when a request names none.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTION_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    integration_secret: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices(
            "integration_secret",
            "NOTION_INTEGRATION_SECRET",
            "NOTION_TOKEN",
        ),
        description="Notion integration token",
    )
    version: str = Field(default=NOTION_VERSION, description="Notion-Version header value")
    base_url: str = Field(default=NotionClient.BASE_URL, description="Notion API host")
    request_timeout: float = Field(
        default=REQUEST_TIMEOUT,
        gt=0,
        le=60,
        description="Request timeout in seconds",
    )
    id_property: str = Field(
        default="ID",
        min_length=1,
        description="Database property holding the external lead ID",
    )
    database_id: str | None = Field(
        default=None,
        description="Default lead database ID",
    )

    def build_client(self, token: str | None = None) -> NotionClient:
        """Create a Notion client from these settings.

        :param token: Optional token overriding the configured one.
        :returns: Configured NotionClient instance.
        """
        return NotionClient(
            token=token or self.integration_secret,
            notion_version=self.version,
            base_url=self.base_url,
            timeout=self.request_timeout,
        )


@lru_cache
def get_leads_settings() -> LeadsConfig:
    """Get cached lead integration settings.

    Settings are loaded once and cached for the lifetime of the process.

    :returns: Configured LeadsConfig instance.
    """
    return LeadsConfig()  # type: ignore[call-arg]
