from ..models.Role import Role
from .tokens import Forbidden, ForbiddenReason, Principal


def ensure_role(principal: Principal, role: Role) -> Principal:
    if principal.role != role:
        raise Forbidden(ForbiddenReason.ROLE_MISMATCH)
    return principal


def ensure_owner(principal: Principal, owner_id: int, role: Role = Role.PATIENT) -> Principal:
    """
    The resource belongs to the (owner_id, role) principal. Patient 1 and
    doctor 1 are different owners, so both parts must match.
    """
    if principal.role != role or principal.identity != owner_id:
        raise Forbidden(ForbiddenReason.OWNERSHIP_MISMATCH)
    return principal
