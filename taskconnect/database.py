import logging

from motor.motor_asyncio import AsyncIOMotorClient

from taskconnect.config import MONGO_URI, DATABASE_NAME

logger = logging.getLogger(__name__)

client = None
db = None


async def connect_to_mongo():
    global client, db

    if not MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    client = AsyncIOMotorClient(MONGO_URI)
    db = client[DATABASE_NAME]
    await client.admin.command('ping')

    # One account per email address
    await db.users.create_index("email", unique=True)
    await db.jobs.create_index("posted_by")
    await db.jobs.create_index("applications._id")

    if "mongodb+srv" in MONGO_URI:
        logger.info(f"Connected to MongoDB Atlas, database '{DATABASE_NAME}'")
    else:
        logger.info(f"Connected to MongoDB, database '{DATABASE_NAME}'")


async def close_mongo_connection():
    if client:
        client.close()
        logger.info("MongoDB connection closed")


def get_db():
    return db
