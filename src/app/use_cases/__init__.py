"""
Use Cases

Organized into domain folders:
- enterprises/: Enterprise lifecycle, join requests and membership changes
- permissions/: Permission catalog and permission checks
- enterprise_permissions/: Enterprise-wide grants
- permission_assignments/: Direct user grants
- roles/: Roles and role assignments

Import from subdirectories.
"""
