# Environment variables
ENV_TIMEOUT = "APICLIENT_TIMEOUT"
ENV_ACCESS_TOKEN = "APICLIENT_ACCESS_TOKEN"
ENV_PRINT_RESPONSE = "APICLIENT_PRINT_RESPONSE"
ENV_DEBUG = "APICLIENT_DEBUG"
ENV_FOLLOW_REDIRECTS = "APICLIENT_FOLLOW_REDIRECTS"
ENV_MAX_WORKERS = "APICLIENT_MAX_WORKERS"

# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"

CONTENT_TYPE_JSON = "application/json"

# Defaults
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_WORKERS = 8
METRICS_WINDOW_SECONDS = 60.0

LOGGER_NAME = "apiclient"
USER_AGENT = "apiclient-python"
