from config import db_config_from_env

DEBUG = False
TESTING = True
SECRET_KEY = "test-secret"
LOG_LEVEL = "WARNING"

DB_CONFIG = db_config_from_env("workforce_test_db")
AUTO_INIT_DB = False
