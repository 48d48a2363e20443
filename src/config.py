from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    debug: bool = True
    log_level: str = "INFO"

    listing_base_path: str = "/properties/list"
    default_city: str = "Hyderabad"

    store_url: str | None = None
    store_api_key: str | None = None
    store_timeout: int = 10

    @property
    def is_store_configured(self) -> bool:
        return all(
            [
                self.store_url,
                self.store_api_key,
            ]
        )

    class Config:
        env_file = ".env"


app_config = AppConfig()
