from os import getenv

class Settings:
    TASK_LIST_KEY = getenv("TASK_LIST_KEY", "taskList")
    TASK_HISTORY_KEY = getenv("TASK_HISTORY_KEY", "taskHistory")
    CORS_ORIGINS = [origin.strip() for origin in getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
    API_BASE_URL = getenv("API_BASE_URL", "http://localhost:8000")
    API_TIMEOUT_SECONDS = float(getenv("API_TIMEOUT_SECONDS", "10"))  # secondes par requête
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
