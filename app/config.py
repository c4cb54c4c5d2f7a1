import os

# JWT signing; always override SECRET_KEY outside local development
SECRET_KEY = os.environ.get("SECRET_KEY", "dev-only-task-manager-secret")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# Any SQLAlchemy URL; a SQLite file in the working directory when unset
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./tasks.db")

# CSV uploads are written here and removed once the import finishes
UPLOAD_DIR = os.environ.get("UPLOAD_DIR", "./uploads")

# Path to a Firebase service-account JSON; push notifications are off while unset
FIREBASE_CREDENTIALS = os.environ.get("FIREBASE_CREDENTIALS", "")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
