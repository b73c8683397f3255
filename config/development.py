import os

from config import db_config_from_env, env_flag

DEBUG = True
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DB_CONFIG = db_config_from_env("workforce_db")

# Local databases get schema.sql applied when the app starts.
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", True)
