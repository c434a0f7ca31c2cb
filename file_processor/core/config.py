import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.APP_NAME = os.environ.get("APP_NAME", "File Processor")
        self.ENV = os.environ.get("ENV", "development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

        # Transient storage for uploaded PDFs while they are being parsed
        self.DOWNLOADS_DIR = os.environ.get("DOWNLOADS_DIR", "./downloads")

        # Timeouts (seconds)
        self.FETCH_TIMEOUT_SECONDS = float(os.environ.get("FETCH_TIMEOUT_SECONDS", "10"))
        self.PDF_PARSE_TIMEOUT_SECONDS = float(os.environ.get("PDF_PARSE_TIMEOUT_SECONDS", "60"))

        # Upper bound on PDF extractions (and therefore transient files) in flight
        self.MAX_CONCURRENT_PDF = int(os.environ.get("MAX_CONCURRENT_PDF", "4"))

        # Upload limits
        self.MAX_UPLOAD_SIZE_MB = int(os.environ.get("MAX_UPLOAD_SIZE_MB", "50"))

        # Front-end origins allowed by CORS
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.environ.get(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000"
            ).split(",")
            if origin.strip()
        ]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    def __repr__(self):
        return (
            f"Settings(APP_NAME={self.APP_NAME}, ENV={self.ENV}, "
            f"LOG_LEVEL={self.LOG_LEVEL}, DOWNLOADS_DIR={self.DOWNLOADS_DIR}, "
            f"FETCH_TIMEOUT_SECONDS={self.FETCH_TIMEOUT_SECONDS}, "
            f"PDF_PARSE_TIMEOUT_SECONDS={self.PDF_PARSE_TIMEOUT_SECONDS}, "
            f"MAX_CONCURRENT_PDF={self.MAX_CONCURRENT_PDF})"
        )


settings = Settings()
