from rest_framework.permissions import BasePermission

from .models import User


def _normalize_roles(allowed_roles):
    if isinstance(allowed_roles, str):
        return {allowed_roles}
    return set(allowed_roles)


class HasRole(BasePermission):
    allowed_roles = ()
    message = 'You do not have the role required for this action.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.role in _normalize_roles(self.allowed_roles)


def role_required(allowed_roles):
    """Build a permission class admitting only the given role(s)."""
    normalized_roles = _normalize_roles(allowed_roles)
    return type(
        'RoleRequired_' + '_'.join(sorted(normalized_roles)),
        (HasRole,),
        {'allowed_roles': tuple(normalized_roles)},
    )


IsAdminRole = role_required(User.ROLE_ADMIN)
IsStudentRole = role_required(User.ROLE_STUDENT)
IsStaffRole = role_required(User.ROLE_STAFF)
IsOccupantRole = role_required({User.ROLE_STUDENT, User.ROLE_STAFF})
IsAdminOrStaffRole = role_required({User.ROLE_ADMIN, User.ROLE_STAFF})
