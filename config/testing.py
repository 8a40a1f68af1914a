SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
DATA_DIR = "data"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "self_attendance_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
SESSION_DAYS = 1

AUTO_INIT_DB = False
