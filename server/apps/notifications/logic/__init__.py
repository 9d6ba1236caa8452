"""Business logic layer for notifications app.

Creating notifications for course events and managing a user's inbox.
"""
