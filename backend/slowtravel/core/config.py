from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Environment
    environment: str = "development"

    # Site
    site_id: str = "slow-morocco"
    site_url: str = "https://slowmorocco.com"

    # Google Sheets
    google_service_account_base64: Optional[str] = None
    google_sheet_id: Optional[str] = None
    nexus_sheet_id: Optional[str] = None
    google_token_uri: str = "https://oauth2.googleapis.com/token"
    sheets_api_base: str = "https://sheets.googleapis.com/v4/spreadsheets"
    sheets_timeout_seconds: int = 10

    # CORS
    allowed_origins: list[str] = ["http://localhost:8501"]

    class Config:
        env_file = ".env"


settings = Settings()
