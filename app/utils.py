"""Общие утилиты приложения."""

from typing import Any

REQUIRED_USER_FIELDS = ["name", "age", "gender"]


def extract_user_details_payload(body: Any) -> Any:
    """
    Достаёт данные пользователя из тела запроса.

    Принимается как {"userDetails": {...}}, так и сам объект с данными.
    """
    if isinstance(body, dict) and isinstance(body.get("userDetails"), dict):
        return body["userDetails"]
    return body


def missing_required_fields(payload: Any) -> list[str]:
    """
    Возвращает обязательные поля, которые не заполнены.

    Args:
        payload: Словарь с данными пользователя

    Returns:
        Список имён незаполненных полей (пустой, если всё заполнено)
    """
    if not isinstance(payload, dict):
        return list(REQUIRED_USER_FIELDS)
    return [field for field in REQUIRED_USER_FIELDS if not payload.get(field)]
