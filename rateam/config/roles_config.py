"""
Roles and Permissions Configuration
This config defines which capabilities each role holds.
Route guards in core/dependencies.py check these names, and /auth/me
returns them so the frontend can decide which dashboards to show.
"""

from rateam.modules.roles.schemas import Role

# Define resources and the actions gated on each
MODULES = {
    "vendors": {
        "resource": "vendors",
        "actions": ["own", "moderate"],
        "description": "Vendor onboarding and moderation"
    },
    "reviews": {
        "resource": "reviews",
        "actions": ["create", "reply", "moderate"],
        "description": "Review submission, replies and moderation"
    },
    "polls": {
        "resource": "polls",
        "actions": ["vote", "request", "manage"],
        "description": "Community polls"
    },
    "users": {
        "resource": "users",
        "actions": ["manage"],
        "description": "User and role management"
    },
    "roles": {
        "resource": "roles",
        "actions": ["assign", "assign_admin"],
        "description": "Role assignment"
    },
    "analytics": {
        "resource": "analytics",
        "actions": ["read"],
        "description": "Admin dashboard analytics"
    },
}

# Every signed-in account holds these
_BASE_PERMISSIONS = [
    "reviews:create",
    "polls:vote",
    "vendors:own",
    "polls:request",
]

_ADMIN_PERMISSIONS = _BASE_PERMISSIONS + [
    "vendors:moderate",
    "reviews:moderate",
    "polls:manage",
    "users:manage",
    "roles:assign",
    "analytics:read",
]

ROLE_PERMISSIONS = {
    Role.USER: _BASE_PERMISSIONS,
    Role.VENDOR: _BASE_PERMISSIONS + ["reviews:reply"],
    Role.ADMIN: _ADMIN_PERMISSIONS,
    Role.SUPER_ADMIN: _ADMIN_PERMISSIONS + ["roles:assign_admin"],
}


def get_all_permissions():
    """
    Returns every permission name defined by MODULES, in declaration order.
    Format: ["vendors:own", "vendors:moderate", ...]
    """
    permissions = []
    for module_config in MODULES.values():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            permissions.append(f"{resource}:{action}")
    return permissions


def get_role_permissions(role: Role):
    """Return the permission names held by a role"""
    return list(ROLE_PERMISSIONS.get(role, []))
