import os

# Page size for every paginated endpoint; not caller controlled
PAGINATION_LIMIT = int(os.getenv("PAGINATION_LIMIT", "20"))

# Upper bound on a single request's database work
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
