"""LDAP self-service password change portal."""

__version__ = "1.0.0"
