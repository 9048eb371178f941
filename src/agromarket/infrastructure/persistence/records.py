"""Helpers shared by the JSON repositories for editing a table in place."""

from __future__ import annotations

from datetime import datetime


def find(records: list[dict], record_id: str) -> dict | None:
    for raw in records:
        if raw["id"] == record_id:
            return raw
    return None


def upsert(records: list[dict], raw: dict) -> None:
    """Replace the record with the same id, otherwise append."""
    for i, existing in enumerate(records):
        if existing["id"] == raw["id"]:
            records[i] = raw
            return
    records.append(raw)


def remove(records: list[dict], record_id: str) -> None:
    records[:] = [raw for raw in records if raw["id"] != record_id]


def newest_first(items: list, key=lambda item: item.created_at) -> list:
    return sorted(items, key=key, reverse=True)


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)
