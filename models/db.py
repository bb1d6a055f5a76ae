from motor.motor_asyncio import AsyncIOMotorClient

from config import MONGO_URI, DB_NAME

client = AsyncIOMotorClient(MONGO_URI)

# URI may carry the db name (/health_tracker); otherwise fall back to DB_NAME
db = client.get_default_database(default=DB_NAME)
