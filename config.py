# config.py
"""
Runtime configuration for the BlockEdu backend.

Every value is read once from the environment (a local .env file is loaded
first) and exposed as a module-level constant.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Database: DATABASE_URL wins; otherwise an MS SQL URL is built from DB_* parts
DATABASE_URL = os.getenv("DATABASE_URL")
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "secret")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))

# HTTP
CORS_ORIGINS = [o for o in os.getenv("CORS_ORIGINS", "*").split(",") if o]
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Hashing / verification (fixed at deploy time)
HASH_ALGORITHM = os.getenv("HASH_ALGORITHM", "sha256")
CANONICALIZATION_VERSION = os.getenv("CANONICALIZATION_VERSION", "v1")
UNANCHORED_POLICY = os.getenv("UNANCHORED_POLICY", "accept").lower()  # accept|reject

# Fees
REGISTRATION_FEE = os.getenv("REGISTRATION_FEE", "500.00")
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")

# Development
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "false").lower() == "true"
