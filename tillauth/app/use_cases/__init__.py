"""
Use Cases

Organized by domain folder:
- auth/: Authentication flows
- sessions/: Session activity reporting and retention
- users/: User management
"""
