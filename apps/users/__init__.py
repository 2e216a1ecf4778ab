"""Users app package.

This module initializes the users app. It defines a custom user model with
guest and tenant roles; tenants own properties. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
