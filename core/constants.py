from pathlib import Path

ROOT = Path(__file__).parent.parent

CLIENT_USER_AGENT = "Portal Client"

SESSION_FILE = ROOT / ".session.json"

# Resource endpoints, relative to the API base URL
BUSINESSES_ENDPOINT = "/umkm"
NEWS_ENDPOINT = "/berita"
GALLERY_ENDPOINT = "/galeri"
GENERAL_INFO_ENDPOINT = "/umum"

DEFAULT_PAGE_SIZE = 12
LATEST_ITEMS_LIMIT = 6

UNKNOWN_ERROR_MESSAGE = "Unknown request error"
