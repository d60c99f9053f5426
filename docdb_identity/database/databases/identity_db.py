"""
Identity database document layout.
Field names the user store filters and indexes on.
"""


class Fields:
    """Document field names queried by the user store."""
    ID = "_id"
    USER_NAME = "userName"
    EMAIL = "email"
    LOGINS = "logins"
    LOGIN_PROVIDER = "loginProvider"
    PROVIDER_KEY = "providerKey"
