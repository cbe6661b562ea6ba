import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "visitor_checkin"),
}

# Resumes uploaded through the public form
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_RESUME_BYTES = int(os.getenv("MAX_RESUME_BYTES", str(5 * 1024 * 1024)))

# Base URL of the visitor form; QR codes point at <PUBLIC_FORM_URL>/<code>
PUBLIC_FORM_URL = os.getenv("PUBLIC_FORM_URL", "http://localhost:5173/form")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo admin on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
