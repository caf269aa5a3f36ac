# AGRICONNECT/core/logger.py
import logging

from AGRICONNECT.core import config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging() -> None:
    """
    Configure root logging. When CLOUD_LOGGING_ENABLED is set, records are
    also shipped to Google Cloud Logging using the Firebase service account.
    """
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO), format=LOG_FORMAT)

    if not config.CLOUD_LOGGING_ENABLED:
        return

    import google.cloud.logging
    from google.oauth2 import service_account
    from AGRICONNECT.core.firebase import load_service_account_info

    info = load_service_account_info()
    creds = service_account.Credentials.from_service_account_info(info)
    client = google.cloud.logging.Client(project=info.get("project_id"), credentials=creds)
    client.setup_logging()
    logging.getLogger("core.logger").info("☁️ Cloud logging enabled for project %s", client.project)


def log_to_cloud(category: str, severity: str, message: str, metadata: dict = None):
    logging.log(
        getattr(logging, severity.upper(), logging.INFO),
        f"[{category}] {message}",
        extra={"metadata": metadata or {}}
    )
