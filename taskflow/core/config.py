from os import getenv


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://taskflow:taskflow@db:5432/taskflow")

    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "60"))
    JWT_REFRESH_EXPIRE_MIN = int(getenv("JWT_REFRESH_EXPIRE_MIN", "43200"))  # 30 jours

    CORS_ORIGINS = _split(getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,"
        "https://taskflow.christophervaldivia.me,https://taskflow-app.vercel.app,"
        "https://taskflow-app-a9p2.onrender.com",
    ))
    CORS_ORIGIN_REGEX = getenv("CORS_ORIGIN_REGEX", r"https://.*\.(vercel\.app|onrender\.com)")

    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

    # Object storage (Supabase Storage REST API)
    STORAGE_URL = getenv("STORAGE_URL", "http://localhost:54321/storage/v1")
    STORAGE_KEY = getenv("STORAGE_KEY", "")
    STORAGE_BUCKET = getenv("STORAGE_BUCKET", "task-attachments")
    MAX_ATTACHMENT_MB = int(getenv("MAX_ATTACHMENT_MB", "10"))

    GOOGLE_CLIENT_ID = getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REDIRECT_URI = getenv("GOOGLE_REDIRECT_URI", "http://localhost:5173/auth/google/callback")

    INVITATION_TTL_DAYS = int(getenv("INVITATION_TTL_DAYS", "7"))


settings = Settings()
