"""
Bedrock Gateway Constants

Central location for wire-level constants shared by the request shaper,
the signer and the stream decoders.
"""

# Credential defaults
DEFAULT_REGION = "us-east-1"

# Generation defaults
DEFAULT_MAX_TOKENS = 4096
ANTHROPIC_BEDROCK_VERSION = "bedrock-2023-05-31"

# Endpoint layout
SERVICE_NAME = "bedrock"
RUNTIME_HOST_TEMPLATE = "bedrock-runtime.{region}.amazonaws.com"
INVOKE_STREAM_PATH_TEMPLATE = "/model/{model}/invoke-with-response-stream"
CONVERSE_PATH_TEMPLATE = "/model/{model}/converse"

# Headers
CONTENT_TYPE_JSON = "application/json"
ACCEPT_EVENT_STREAM = "application/vnd.amazon.eventstream"

# Line-event stream vocabulary
DATA_PREFIX = "data:"
EVENT_PREFIX = "event:"
DONE_SENTINEL = "[DONE]"
TERMINAL_EVENTS = frozenset({"completion", "done"})

# Fallback vendor error text
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Auth error messages
MISSING_CREDENTIALS_MESSAGE = "Bedrock credentials not configured"
MISSING_API_KEY_MESSAGE = "Bedrock API key is required"
MISSING_SIGNING_KEYS_MESSAGE = "AWS Access Key ID and Secret Access Key are required"

# Environment variables read by GatewaySettings.from_env()
ENV_AUTH_METHOD = "BEDROCK_AUTH_METHOD"
ENV_API_KEY = "BEDROCK_API_KEY"
ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_SESSION_TOKEN = "AWS_SESSION_TOKEN"
ENV_REGION = "BEDROCK_REGION"
ENV_AWS_REGION = "AWS_REGION"
ENV_ENDPOINT_URL = "BEDROCK_ENDPOINT_URL"
ENV_TIMEOUT = "BEDROCK_TIMEOUT_SECONDS"
ENV_CONNECT_TIMEOUT = "BEDROCK_CONNECT_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "BEDROCK_LOG_LEVEL"
