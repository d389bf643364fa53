from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    """
    Centralized application settings. Pydantic's BaseSettings will automatically
    load these from environment variables or a .env file.
    """
    # --- Remote SHACL / inference service ---
    SHACL_API_BASE_URL: str = Field("https://shacl-api-docker.onrender.com/api", description="Base URL of the shape, inference and persistence service.")
    VALIDATE_PATH: str = Field("/infer", description="Endpoint path used for validation requests.")
    REQUEST_TIMEOUT: float = Field(30.0, description="Timeout in seconds for outbound service requests.")

    # --- Namespaces ---
    ONTOLOGY_NS: str = Field("https://falcontologist.github.io/shacl-demo/ontology/", description="Namespace bound to the empty prefix.")
    TEMP_NS: str = Field("https://falcontologist.github.io/shacl-demo/temp/", description="Working namespace for minted instances.")

    # --- System Parameters ---
    LOG_LEVEL: str = Field("INFO", description="Log level for the application loggers.")
    CORS_ORIGINS: List[str] = Field(["http://localhost", "http://localhost:3000"], description="Origins allowed to call the HTTP API.")

    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

settings = Settings()
