import os

PORT = int(os.getenv("PORT", 4001))
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:5173")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
