"""
Team role permissions configuration
Defines which team role may perform which action on each resource kind.
Used by the role gates in modeler.core.permissions and echoed to the
frontend alongside team details.
"""

from modeler.modules.teams.models import TeamRole

# Access levels, most to least privileged
ACCESS_LEVELS = {
    "owner": frozenset({TeamRole.OWNER}),
    "admin": frozenset({TeamRole.OWNER, TeamRole.ADMIN}),
    "write": frozenset({TeamRole.OWNER, TeamRole.ADMIN, TeamRole.WRITE}),
    "read": frozenset({TeamRole.OWNER, TeamRole.ADMIN, TeamRole.WRITE, TeamRole.READ}),
}

# Define modules and the access level each action requires
MODULES = {
    "teams": {
        "resource": "teams",
        "actions": {
            "read": "read",
            "update": "admin",
            "invite": "admin",
            "manage_members": "admin",
            "delete": "owner",
            "transfer": "owner",
        },
        "description": "Team settings and membership"
    },
    "projects": {
        "resource": "projects",
        "actions": {
            "create": "admin",
            "read": "read",
            "update": "admin",
            "delete": "admin",
        },
        "description": "Projects owned by a team"
    },
    "entities": {
        "resource": "entities",
        "actions": {
            "create": "write",
            "read": "read",
            "update": "write",
            "delete": "write",
        },
        "description": "ERD entities on a project canvas"
    },
    "notes": {
        "resource": "notes",
        "actions": {
            "create": "write",
            "read": "read",
            "update": "write",
            "delete": "write",
        },
        "description": "Free-form notes on a project canvas"
    },
}

# Roles an inviter may hand out. Roles missing here may not invite at all.
INVITABLE_ROLES = {
    TeamRole.OWNER: (TeamRole.ADMIN, TeamRole.WRITE, TeamRole.READ),
    TeamRole.ADMIN: (TeamRole.WRITE, TeamRole.READ),
}

# Additional descriptions for specific actions
MODULE_SPECIFIC_PERMISSIONS = {
    "teams": {
        "invite": "Invite users to the team",
        "manage_members": "Change member roles",
        "transfer": "Transfer team ownership"
    }
}


# Generate permission matrix
def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the roles holding them
    Format: {
        "permissions": [
            {"name": "entities:create", "resource": "entities", "action": "create",
             "level": "write", "description": "..."},
            ...
        ],
        "roles": {
            "OWNER": ["entities:create", ...],
            ...
        }
    }
    """
    permissions = []
    roles = {role.value: [] for role in TeamRole}

    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]

        for action, level in module_config["actions"].items():
            permission_name = f"{resource}:{action}"
            description = f"{action.capitalize()} {resource}"

            if module_name in MODULE_SPECIFIC_PERMISSIONS and action in MODULE_SPECIFIC_PERMISSIONS[module_name]:
                description = MODULE_SPECIFIC_PERMISSIONS[module_name][action]

            permissions.append({
                "name": permission_name,
                "resource": resource,
                "action": action,
                "level": level,
                "description": description
            })

            for role in ACCESS_LEVELS[level]:
                roles[role.value].append(permission_name)

    return {
        "permissions": permissions,
        "roles": {name: sorted(names) for name, names in roles.items()}
    }


PERMISSION_MATRIX = get_permission_matrix()
