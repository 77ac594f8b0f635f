import os
import logging
from motor.motor_asyncio import AsyncIOMotorClient
from typing import Optional
from dotenv import load_dotenv
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def build_mongodb_url() -> str:
    """MONGODB_URL wins; otherwise build the Atlas SRV URI from DB_USER/DB_PASS"""
    mongodb_url = os.getenv("MONGODB_URL")
    if mongodb_url:
        return mongodb_url

    db_user = os.getenv("DB_USER")
    db_pass = os.getenv("DB_PASS")
    if db_user and db_pass:
        cluster = os.getenv("DB_CLUSTER", "cluster0.nkerzi4.mongodb.net")
        return f"mongodb+srv://{db_user}:{db_pass}@{cluster}/?appName=Cluster0"

    return "mongodb://localhost:27017"


class Database:
    client: Optional[AsyncIOMotorClient] = None

    @classmethod
    async def connect_db(cls):
        """Connect to MongoDB. A failed ping is logged and does not stop the app."""
        cls.client = AsyncIOMotorClient(build_mongodb_url())

        try:
            await cls.client.admin.command("ping")
            logger.info("Pinged your deployment. Connected to MongoDB")
            await cls.create_indexes()
        except PyMongoError as e:
            logger.error(f"MongoDB connection error: {e}")

    @classmethod
    async def create_indexes(cls, db=None):
        """Create database indexes"""
        db = db if db is not None else cls.get_db()

        # Users: one record per email
        try:
            await db.users.create_index([("email", ASCENDING)], unique=True)
            logger.info("Created unique index on users.email")
        except PyMongoError as e:
            logger.warning(f"Index on users.email may already exist: {e}")

        # Contests: public listings and popularity ranking
        try:
            await db.contests.create_index([("status", ASCENDING), ("participation_count", DESCENDING)])
            await db.contests.create_index([("creator_email", ASCENDING), ("created_at", DESCENDING)])
            logger.info("Created indexes on contests")
        except PyMongoError as e:
            logger.warning(f"Indexes on contests may already exist: {e}")

        # Payments: lookups by payer and contest (not unique)
        try:
            await db.payments.create_index([("email", ASCENDING), ("contest_id", ASCENDING)])
            logger.info("Created index on payments")
        except PyMongoError as e:
            logger.warning(f"Index on payments may already exist: {e}")

        # Submissions: one entry per participant per contest
        try:
            await db.submissions.create_index(
                [("contest_id", ASCENDING), ("email", ASCENDING)],
                unique=True
            )
            logger.info("Created unique index on submissions (contest_id, email)")
        except PyMongoError as e:
            logger.warning(f"Index on submissions may already exist: {e}")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection"""
        if cls.client:
            cls.client.close()
            logger.info("Disconnected from MongoDB")

    @classmethod
    def get_db(cls):
        """Get database instance"""
        database_name = os.getenv("DATABASE_NAME", "contestHubDB")
        return cls.client[database_name]


async def get_database():
    """Dependency to get database"""
    return Database.get_db()
