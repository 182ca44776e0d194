import os

# Listener defaults; override via environment
HOST = os.environ.get("MS_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("MS_API_PORT", "8080"))
METRICS_PORT = int(os.environ.get("MS_METRICS_PORT", "8081"))

VERSION = os.environ.get("MS_VERSION", "1.0.0")
LOG_LEVEL = os.environ.get("MS_LOG_LEVEL", "INFO")
