"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from designer_connectors.schemas import ApiHubServiceDetails


class Settings(BaseSettings):
    """Connector service settings loaded from environment variables."""

    # Designer / runtime host
    api_version: str = "2018-11-01"
    base_url: str = "http://localhost:7071/runtime/webhooks/workflow/api/management"
    workflow_reference_id: str = ""

    # API Hub
    api_hub_api_version: str = "2018-07-01-preview"
    api_hub_base_url: str = "https://management.azure.com"
    api_hub_subscription_id: str = ""
    api_hub_resource_group: str = ""

    # Transport
    http_timeout_seconds: float = 60.0

    class Config:
        env_prefix = "DESIGNER_CONNECTORS_"
        env_file = ".env"
        env_file_encoding = "utf-8"

    def api_hub_service_details(self) -> ApiHubServiceDetails:
        return ApiHubServiceDetails(
            api_version=self.api_hub_api_version,
            base_url=self.api_hub_base_url,
            subscription_id=self.api_hub_subscription_id,
            resource_group=self.api_hub_resource_group,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
