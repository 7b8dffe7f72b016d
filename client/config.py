import os
from dotenv import load_dotenv




load_dotenv()

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:3001")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))
