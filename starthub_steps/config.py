import os
from dotenv import load_dotenv

load_dotenv()

DO_API_BASE_URL = os.getenv("DO_API_BASE_URL", "https://api.digitalocean.com")

HTTP_CONNECT_TIMEOUT_S = float(os.getenv("HTTP_CONNECT_TIMEOUT_S", "15.0"))
HTTP_READ_TIMEOUT_S = float(os.getenv("HTTP_READ_TIMEOUT_S", "30.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Orchestrator-recognised prefix of the one state line on stdout
STATE_SENTINEL = "::starthub:state::"

DEFAULT_FIREWALL_NAME = os.getenv("DEFAULT_FIREWALL_NAME", "starthub-firewall")

# Key under which callers hand over a complete provider payload
RAW_FIREWALL_KEY = "raw_firewall"

# Searched in order, first non-empty value wins
CREDENTIAL_SOURCES = (
    ("param", "do_token"),
    ("param", "digitalocean_token"),
    ("env", "DIGITALOCEAN_TOKEN"),
    ("env", "DO_TOKEN"),
)

# Rich-form patches are nested under this key
RICH_ACTION_KEY = "do_firewall"
