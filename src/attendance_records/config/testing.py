import os

MONGO_URI = os.getenv("MONGO_URI") or "mongodb://localhost:27017"
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "attendance_db_test")
MONGO_COLLECTION = "records"
MONGO_CONNECT_TIMEOUT_MS = 2000
MONGO_OPERATION_TIMEOUT = 5.0

DISPLAY_TIMEZONE = "Asia/Kolkata"
DISPLAY_TIMEZONE_LABEL = "IST"

HTTP_PORT = 8080
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
