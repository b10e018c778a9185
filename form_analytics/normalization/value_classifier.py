from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ValueKind(Enum):
    ABSENT = "absent"
    STRING = "string"
    FILES = "files"
    OBJECT = "object"
    OTHER = "other"


class ValueClassifier:
    FILE_DESCRIPTOR_KEYS = {"name", "url"}

    DATETIME_FORMATS = [
        "%Y-%m-%dT%H:%M:%S.%f%z",
        "%Y-%m-%dT%H:%M:%S%z",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d",
    ]

    @classmethod
    def classify(cls, value: Any) -> ValueKind:
        if value is None:
            return ValueKind.ABSENT

        if isinstance(value, str):
            if value == "":
                return ValueKind.ABSENT
            return ValueKind.STRING

        if isinstance(value, list):
            if not value:
                return ValueKind.ABSENT
            if all(cls._is_file_descriptor(item) for item in value):
                return ValueKind.FILES
            return ValueKind.OBJECT

        if isinstance(value, dict):
            if not value:
                return ValueKind.ABSENT
            return ValueKind.OBJECT

        return ValueKind.OTHER

    @classmethod
    def is_present(cls, value: Any) -> bool:
        return cls.classify(value) is not ValueKind.ABSENT

    @classmethod
    def file_names(cls, value: Any) -> list[str]:
        if cls.classify(value) is not ValueKind.FILES:
            return []
        return [str(item.get("name") or item.get("url")) for item in value]

    @classmethod
    def parse_timestamp(cls, value: Any) -> Optional[datetime]:
        if value is None:
            return None

        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, str):
            parsed = cls._parse_datetime(value.strip())
            if parsed is None:
                return None
        else:
            return None

        # Naive timestamps from the store are UTC
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @classmethod
    def _is_file_descriptor(cls, item: Any) -> bool:
        return isinstance(item, dict) and bool(cls.FILE_DESCRIPTOR_KEYS & item.keys())

    @classmethod
    def _parse_datetime(cls, value: str) -> Optional[datetime]:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
        for fmt in cls.DATETIME_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        return None


def classify_value(value: Any) -> ValueKind:
    return ValueClassifier.classify(value)


def is_present(value: Any) -> bool:
    return ValueClassifier.is_present(value)
