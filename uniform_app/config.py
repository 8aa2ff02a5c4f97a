import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# "memory" keeps everything in process, "firestore" uses Cloud Firestore
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory").lower()

FIREBASE_SERVICE_ACCOUNT_KEY_PATH = os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY_PATH")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_LOW_STOCK_THRESHOLD = int(os.getenv("DEFAULT_LOW_STOCK_THRESHOLD", "5"))

# Define collection names
INVENTORY_COLLECTION = "inventory"
STUDENTS_COLLECTION = "students"
ISSUANCES_COLLECTION = "uniform_issuances"
