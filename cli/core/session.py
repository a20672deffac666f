# cli/core/session.py
import json
from typing import Optional

from .config import SESSION_FILE


def save_session(token: str, role: str, account_id: int) -> None:
    """
    Stores the access token and the account it belongs to in SESSION_FILE.
    """
    data = {"token": token, "role": role, "id": account_id}
    with open(SESSION_FILE, "w", encoding="utf-8") as f:
        json.dump(data, f)


def load_session() -> Optional[dict]:
    """
    Reads the session file. Returns None if it is missing or unreadable.
    """
    if not SESSION_FILE.exists():
        return None

    try:
        with open(SESSION_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        # An unreadable session file means there is no valid session
        return None
    if not isinstance(data, dict) or not data.get("token"):
        return None
    return data


def load_token() -> Optional[str]:
    session = load_session()
    return session["token"] if session else None


def clear_session() -> None:
    """
    Deletes the session file, ending the local session.
    """
    if SESSION_FILE.exists():
        SESSION_FILE.unlink()


def is_logged_in() -> bool:
    return load_session() is not None
