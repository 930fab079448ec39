# settings.py
import os
from pathlib import Path

MB = 1024 * 1024


class Settings:
    """Runtime configuration, read from the environment unless overridden."""

    def __init__(
        self,
        uploads_dir=None,
        certificates_dir=None,
        testing_uploads_dir=None,
        fonts_dir=None,
        max_file_size=None,
        max_batch_size=None,
        host=None,
        port=None,
        log_level=None,
    ):
        self.uploads_dir = Path(uploads_dir or os.getenv("UPLOADS_DIR", "uploads"))
        self.certificates_dir = Path(certificates_dir or os.getenv("CERTIFICATES_DIR", "certificates"))
        self.testing_uploads_dir = Path(
            testing_uploads_dir or os.getenv("TESTING_UPLOADS_DIR", "testingUploads")
        )
        self.fonts_dir = Path(fonts_dir or os.getenv("FONTS_DIR", "fonts"))

        self.max_file_size = max_file_size or int(os.getenv("MAX_FILE_SIZE", 10 * MB))
        self.max_batch_size = max_batch_size or int(os.getenv("MAX_BATCH_SIZE", 50 * MB))

        self.host = host or os.getenv("HOST", "0.0.0.0")
        self.port = port or int(os.getenv("PORT", 8787))
        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
