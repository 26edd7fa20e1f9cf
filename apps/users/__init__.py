"""Users app package.

Defines the custom user model (``apps.users.models.CustomUser``, the
AUTH_USER_MODEL of the project), the capability scopes carried by access
tokens and the :class:`~apps.users.capabilities.Actor` identity passed to
domain services.
"""
