# ==============================================
# TOPIC 3: STORAGE (MongoDB)
# ==============================================
#
# This package fetches the engine's inputs: form schemas,
# submissions and page views. It is the only place that talks
# to the database.
#
# Modules:
# --------
# - mongo_client.py    → MongoDB connection and read queries
#
# ==============================================

from .mongo_client import MongoFormStore

__all__ = [
    "MongoFormStore",
]
