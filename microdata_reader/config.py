import os
from dotenv import load_dotenv

load_dotenv()

# --------------------------------------------------
# CONFIG
# --------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MAX_HTML_SIZE = int(os.getenv("MAX_HTML_SIZE", "5000000"))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "20"))

MAX_URLS = int(os.getenv("MAX_URLS", "5"))
MAX_HTMLS = int(os.getenv("MAX_HTMLS", "5"))

DYNAMIC_FALLBACK = os.getenv("DYNAMIC_FALLBACK", "true").lower() in ("1", "true", "yes")
