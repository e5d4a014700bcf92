"""Configuration management for the click tracker."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Application configuration.

    Values are read from the environment when the instance is built, so a
    fresh ``Config()`` picks up any variables changed since import.
    """

    def __init__(self) -> None:
        # Store connector: credentials, host, port and db live in the URL
        self.STORE_URL: str = os.getenv("STORE_URL", "redis://localhost:6379/0")
        self.CLICKS_KEY: str = os.getenv("CLICKS_KEY", "clicks")
        self.STORE_TIMEOUT: float = float(os.getenv("STORE_TIMEOUT", "5.0"))

        # HTTP surface
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8080"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Polling client
        self.SERVER_URL: str = os.getenv("SERVER_URL", "http://127.0.0.1:8080")
        self.POLL_INTERVAL: float = float(os.getenv("POLL_INTERVAL", "1.0"))
        # above STORE_TIMEOUT so a stalled store still reaches the client as a 503
        self.CLIENT_TIMEOUT: float = float(os.getenv("CLIENT_TIMEOUT", "10.0"))


config = Config()
