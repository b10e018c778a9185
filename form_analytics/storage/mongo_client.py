# ==============================================
# MongoFormStore
# ==============================================
#
# PURPOSE:
#   Reads forms, submissions and page views from MongoDB and converts
#   them into the typed records the aggregation engine consumes.
#
# WHY THIS CLASS EXISTS:
#   The engine never touches the database. Something has to fetch its
#   inputs first; this is that something. Keeping it separate means the
#   engine can be tested with plain lists.
#
# CLASS: MongoFormStore
# ---------------------
#   Stateful, holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, user=None, password=None, collections=None)
#
#   Methods:
#   --------
#   - connect() -> None
#   - disconnect() -> None
#
#   - get_form(form_id) -> FormSchema
#       Raises FormNotFoundError if there is no such form.
#
#   - get_user_forms(user_id) -> list[FormSummary]
#
#   - get_submissions(form_ids) -> list[SubmissionRecord]
#       Newest first. Documents that cannot be parsed are skipped.
#
#   - get_views(form_ids) -> list[ViewEvent]
#
#   - count_views(form_ids) -> dict[str, int]
#       Per-form view counter, computed by the database.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MongoFormStore(...) as store:` usage.
#
# ==============================================

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from pymongo import DESCENDING
from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure

from form_analytics.config import CollectionsConfig, MongoConfig
from form_analytics.errors import FormNotFoundError, StoreError
from form_analytics.normalization import (
    FormSchema,
    FormSummary,
    SubmissionRecord,
    ViewEvent,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MongoFormStore:
    def __init__(self, host, port, database, user=None, password=None,
                 collections: Optional[CollectionsConfig] = None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.collections = collections or CollectionsConfig()
        self.client = None  # Will hold the actual MongoDB client connection

    @classmethod
    def from_config(cls, mongo: MongoConfig,
                    collections: Optional[CollectionsConfig] = None) -> "MongoFormStore":
        return cls(
            host=mongo.host,
            port=mongo.port,
            database=mongo.database,
            user=mongo.user,
            password=mongo.password,
            collections=collections,
        )

    def connect(self):
        # Establish connection to MongoDB.
        try:
            if self.user and self.password:
                uri = f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
            else:
                uri = f"mongodb://{self.host}:{self.port}/{self.database}"
            self.client = PyMongoClient(uri)
            # Test connection
            self.client.admin.command('ping')
            logger.info("Connected to MongoDB at %s:%s.", self.host, self.port)
        except ConnectionFailure as e:
            logger.error("Could not connect to MongoDB: %s", e)
            raise StoreError(f"Could not connect to MongoDB: {e}") from e
        except OperationFailure as e:
            logger.error("Authentication failed: %s", e)
            raise StoreError(f"MongoDB authentication failed: {e}") from e

    def disconnect(self):
        # Close connection.
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB.")
            self.client = None

    def get_form(self, form_id: str) -> FormSchema:
        # A form may be keyed by our own id or by Mongo's _id
        document = self._collection(self.collections.forms).find_one(
            {"$or": [{"id": form_id}, {"_id": form_id}]}
        )
        if document is None:
            raise FormNotFoundError(form_id)
        return FormSchema.from_dict(document)

    def get_user_forms(self, user_id: str) -> List[FormSummary]:
        documents = self._collection(self.collections.forms).find(
            {"user_id": user_id},
            {"id": 1, "created_at": 1, "view_count": 1, "total_views": 1, "views": 1},
        )
        return self._parse_all(documents, FormSummary.from_dict, "form")

    def get_submissions(self, form_ids: Iterable[str]) -> List[SubmissionRecord]:
        form_ids = list(form_ids)
        if not form_ids:
            return []
        documents = self._collection(self.collections.submissions).find(
            {"form_id": {"$in": form_ids}}
        ).sort("submitted_at", DESCENDING)
        return self._parse_all(documents, SubmissionRecord.from_dict, "submission")

    def get_views(self, form_ids: Iterable[str]) -> List[ViewEvent]:
        form_ids = list(form_ids)
        if not form_ids:
            return []
        documents = self._collection(self.collections.views).find(
            {"form_id": {"$in": form_ids}}
        )
        return self._parse_all(documents, ViewEvent.from_dict, "view")

    def count_views(self, form_ids: Iterable[str]) -> Dict[str, int]:
        form_ids = list(form_ids)
        if not form_ids:
            return {}
        pipeline = [
            {"$match": {"form_id": {"$in": form_ids}}},
            {"$group": {"_id": "$form_id", "count": {"$sum": 1}}},
        ]
        results = self._collection(self.collections.views).aggregate(pipeline)
        return {str(row["_id"]): int(row["count"]) for row in results}

    def _collection(self, name: str):
        if not self.client:
            raise StoreError("Not connected to MongoDB.")
        return self.client[self.database][name]

    @staticmethod
    def _parse_all(
        documents: Iterable[Dict[str, Any]],
        parse: Callable[[Dict[str, Any]], T],
        kind: str,
    ) -> List[T]:
        parsed: List[T] = []
        for document in documents:
            try:
                parsed.append(parse(document))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping malformed %s %s: %s", kind, document.get("_id"), e)
        return parsed

    def __enter__(self):
        # For `with MongoFormStore(...) as store:` usage.
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
