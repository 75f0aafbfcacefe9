from dotenv import load_dotenv
import os

# Load environment variables from a .env file
load_dotenv()

# Retrieve parts of the database URL from environment variables
DB_USER = os.getenv("DB_USERNAME", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
DB_PORT = os.getenv("DB_PORT", "3306")
DB_NAME = os.getenv("DB_NAME", "versoforms")

# Build the database URL, unless one is given outright
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# Token settings
SECRET_KEY = os.getenv("SECRET_KEY", "secret")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 7))

# AWS Configuration
S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME", "submissions")
AWS_ACCESS_KEY = os.getenv("AWS_ACCESS_KEY")
AWS_SECRET_KEY = os.getenv("AWS_SECRET_KEY")
S3_REGION = os.getenv("S3_REGION")
S3_URL = os.getenv("S3_URL", f"https://{S3_BUCKET_NAME}.s3.{S3_REGION}.amazonaws.com")

# Reverse geocoding lookup used by the location assist
GEOCODER_URL = os.getenv("GEOCODER_URL", "https://nominatim.openstreetmap.org")
GEOCODER_TIMEOUT_SECONDS = float(os.getenv("GEOCODER_TIMEOUT_SECONDS", 10))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Submission limits
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000
MAX_PHOTO_SIZE = 5 * 1024 * 1024  # 5MB
ALLOWED_PHOTO_TYPES = {"image/jpeg", "image/png", "image/jpg"}

# Shared secret gating POST /setup-admin. Not rotatable; change before deploying.
ADMIN_SETUP_KEY = "INITIAL_ADMIN_SETUP_2024"
ADMIN_ROLE = "admin"
