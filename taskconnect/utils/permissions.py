from taskconnect.exceptions import AccessDenied
from taskconnect.models.user import Principal

_ANY_OWNER = object()


def authorize(principal: Principal, required_role: str, owner_id=_ANY_OWNER) -> None:
    """
    Raise AccessDenied unless ``principal`` holds ``required_role``.

    When ``owner_id`` is given the principal must also be that owner. A
    resource whose owner is unknown (``owner_id=None``) is owned by nobody.
    """
    if principal is None or principal.role != required_role:
        raise AccessDenied()

    if owner_id is not _ANY_OWNER and principal.id != owner_id:
        raise AccessDenied("You can only manage applications for your own job postings")
