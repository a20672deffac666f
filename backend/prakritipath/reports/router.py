from typing import Annotated

from fastapi import APIRouter, Depends

from ..auth.service import check_ownership, get_current_principal
from ..auth.tokens import Principal
from ..models.Role import Role
from .service import get_lab_reports

router = APIRouter(tags=["reports"])

@router.get("/user/{user_id}/lab-reports")
async def lab_reports(user_id: int, principal: Annotated[Principal, Depends(get_current_principal)]):
    """
    Mocked lab reports of a patient, visible only to that patient.
    """
    check_ownership(principal, user_id, Role.PATIENT)
    return {"success": True, "reports": get_lab_reports(user_id)}
