"""Notifications app package.

Delivers approval requests to listing administrators, in-app and by
email, whenever an office enters the pending approval state. Delivery
runs in Celery tasks triggered by domain events after commit.
"""
