from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "FuelTollTracker"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # DynamoDB
    DYNAMO_REGION: str = Field(default="ap-northeast-2")
    DYNAMO_ENDPOINT_URL: Optional[str] = Field(default=None)  # e.g. DynamoDB Local
    DYNAMO_USERS_TABLE: str = Field(default="fuel-tracker-users", validation_alias="DYNAMO_TABLE_USERS")
    DYNAMO_FUEL_TABLE: str = Field(default="fuel-tracker-fuel-records", validation_alias="DYNAMO_TABLE_FUEL")
    DYNAMO_TOLL_TABLE: str = Field(default="fuel-tracker-toll-records", validation_alias="DYNAMO_TABLE_TOLL")
    DYNAMO_SETTINGS_TABLE: str = Field(default="fuel-tracker-settings", validation_alias="DYNAMO_TABLE_SETTINGS")

    # JWT Authentication
    JWT_SECRET_KEY: str = Field(default="change-me-in-production", validation_alias="JWT_SECRET")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # Which of fuel_amount / total_cost wins when a form submits both
    RECONCILE_PREFER: str = Field(default="volume")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, populate_by_name=True)


settings = Settings()
