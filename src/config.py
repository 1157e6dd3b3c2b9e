import os

class Config:
    # Upload root (recreated on server startup)
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", "data/uploads")
    UPLOAD_CHUNK_SIZE = 1024 * 1024
    MAX_UPLOAD_FILES = int(os.getenv("MAX_UPLOAD_FILES", "10000"))

    # API
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8000"))
    API_URL = os.getenv("API_URL", "http://localhost:8000")
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Download
    ZIP_FILENAME = "clean-files.zip"
    ARCHIVE_CHUNK_SIZE = 64 * 1024

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def ensure_dirs(cls):
        os.makedirs(cls.UPLOAD_DIR, exist_ok=True)
