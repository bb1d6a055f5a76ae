import os
from dotenv import load_dotenv

load_dotenv()

# goal writes run in transactions: point this at a replica set (single-node is fine), e.g. ?replicaSet=rs0
MONGO_URI = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017/health_tracker")
DB_NAME = os.getenv("DB_NAME", "health_tracker")

LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()
SERVICE_NAME = os.getenv("SERVICE_NAME", "health_tracker")

_cors = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS = ["*"] if _cors.strip() == "*" else [o.strip() for o in _cors.split(",") if o.strip()]
