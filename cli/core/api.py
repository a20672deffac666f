import requests
from typing import Optional, List
from .config import BASE_URL, TIMEOUT


class ApiError(Exception):
    """The backend rejected the request or could not be reached."""


def _headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}

def _message(resp: requests.Response) -> str:
    try:
        return resp.json().get("message") or resp.reason
    except ValueError:
        return resp.reason

def _request(method: str, path: str, token: Optional[str] = None, **kwargs) -> dict:
    headers = _headers(token) if token else {}
    try:
        resp = requests.request(method, f"{BASE_URL}{path}", headers=headers, timeout=TIMEOUT, **kwargs)
    except requests.RequestException as e:
        raise ApiError(f"Could not reach backend: {e}")
    if resp.status_code != 200:
        raise ApiError(f"{resp.status_code}: {_message(resp)}")
    try:
        return resp.json()
    except ValueError:
        raise ApiError("Invalid response from backend")


def api_signup(role: str, data: dict) -> str:
    """
    Registers a patient ("user") or doctor account. Returns the backend message.
    """
    path = "/doctor/signup" if role == "doctor" else "/user/signup"
    return _request("POST", path, json=data).get("message", "")

def api_login(role: str, email: str, password: str) -> Optional[dict]:
    """
    Logs in and returns {"token", "account"}, or None on bad credentials.
    """
    path = "/doctor/login" if role == "doctor" else "/user/login"
    try:
        body = _request("POST", path, json={"email": email, "password": password})
    except ApiError:
        return None
    account = body.get("doctor") if role == "doctor" else body.get("user")
    return {"token": body["token"], "account": account}

def api_logout(token: str) -> bool:
    try:
        _request("POST", "/logout", token)
        return True
    except ApiError:
        return False

def api_book(token: str, doctor_id: int, date: str, time: str, reason: str) -> int:
    body = _request(
        "POST", "/consultation/book", token,
        json={"doctor_id": doctor_id, "date": date, "time": time, "reason": reason},
    )
    return body["consultationId"]

def api_history(token: str, user_id: int) -> List[dict]:
    return _request("GET", f"/user/{user_id}/history", token)["consultations"]

def api_lab_reports(token: str, user_id: int) -> List[dict]:
    return _request("GET", f"/user/{user_id}/lab-reports", token)["reports"]

def api_doctor_schedule(token: str, doctor_id: int) -> List[dict]:
    return _request("GET", f"/doctor/{doctor_id}/consultations", token)["consultations"]

def api_reschedule(token: str, consultation_id: int, date: str, time: str) -> dict:
    body = _request(
        "PUT", f"/doctor/consultation/{consultation_id}/reschedule", token,
        json={"date": date, "time": time},
    )
    return body["consultation"]

def api_list_doctors() -> List[dict]:
    return _request("GET", "/doctors")
