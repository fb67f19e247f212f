# freshbite/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./freshbite.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

JWT_SECRET = os.getenv("JWT_SECRET", "your_super_secret_jwt_key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_SECONDS = int(os.getenv("JWT_EXPIRE_SECONDS", 7 * 24 * 60 * 60))

RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY_ID")
RAZORPAY_KEY_SECRET = os.getenv("RAZORPAY_KEY_SECRET")
RAZORPAY_API_URL = os.getenv("RAZORPAY_API_URL", "https://api.razorpay.com/v1")
RAZORPAY_PLACEHOLDER_KEY = "rzp_test_123456"

NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "FreshBite/1.0 (contact@freshbite.app)")
OSRM_URL = os.getenv("OSRM_URL", "https://router.project-osrm.org")
HTTP_TIMEOUT_SECONDS = int(os.getenv("HTTP_TIMEOUT_SECONDS", 5))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
MAX_ADDRESSES = int(os.getenv("MAX_ADDRESSES", 5))
