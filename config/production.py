import os

from config import db_config_from_env, env_flag

DEBUG = False
SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DB_CONFIG = db_config_from_env("workforce_db")

# Schema changes go through scripts/init_db.py.
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", False)
