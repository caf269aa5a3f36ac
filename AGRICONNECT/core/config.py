# file: AGRICONNECT/core/config.py
import os
import logging

logger = logging.getLogger("core.config")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ==============================
# Server
# ==============================
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CLOUD_LOGGING_ENABLED = _env_bool("CLOUD_LOGGING_ENABLED", False)

# ==============================
# Firebase
# ==============================
# ✅ Base64-encoded service account JSON (EXPO_ANDROID_KEY kept for older deployments)
FIREBASE_SERVICE_ACCOUNT_B64 = os.getenv("FIREBASE_SERVICE_ACCOUNT_B64") or os.getenv("EXPO_ANDROID_KEY")
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
FIREBASE_STORAGE_BUCKET = os.getenv("FIREBASE_STORAGE_BUCKET", "agriconnectdatabase.appspot.com")

# ==============================
# Outbound services
# ==============================
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY")
GEOCODE_URL = os.getenv("GEOCODE_URL", "https://maps.googleapis.com/maps/api/geocode/json")
EXPO_HOST = os.getenv("EXPO_HOST", "https://exp.host")
EXPO_PUSH_URL = os.getenv("EXPO_PUSH_URL", f"{EXPO_HOST}/--/api/v2/push/send")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# ==============================
# Rate limiting
# ==============================
RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", True)
SIGNUP_RATE_LIMIT = os.getenv("SIGNUP_RATE_LIMIT", "5/minute")

# ==============================
# Temp user sweep
# ==============================
TEMP_USER_TTL_MINUTES = int(os.getenv("TEMP_USER_TTL_MINUTES", "60"))
TEMP_USER_SWEEP_MINUTES = int(os.getenv("TEMP_USER_SWEEP_MINUTES", "30"))

# ==============================
# Collections
# ==============================
USERS = "users"
TEMP_USERS = "temp_users"
STORES = "stores"
PRODUCTS = "products"
ORDERS = "Orders"
DELIVERY_ADDRESS = "delivery_address"
RIDER_LOCATION = "rider_location"
AUDIT_LOGS = "audit_logs"
