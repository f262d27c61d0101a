import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./applyflow.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Auth (tokens are issued by the hosted auth provider, we only verify them)
AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE")

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# ✅ Resume file storage
STORAGE_DIR = os.getenv("STORAGE_DIR", "storage")
MAX_RESUME_SIZE = int(os.getenv("MAX_RESUME_SIZE", str(5 * 1024 * 1024)))

# ✅ CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]
