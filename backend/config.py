import os
from dotenv import load_dotenv




load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./worldcities.db")

# drop_all + create_all on every start, useful for demo runs only
RESET_DATABASE = _flag("RESET_DATABASE", "false")
SEED_TEST_DATA = _flag("SEED_TEST_DATA", "true")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://127.0.0.1:5500").split(",")
    if origin.strip()
]

# the country picklist asks for pageSize=9999
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "10000"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
