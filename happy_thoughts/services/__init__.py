"""
Happy Thoughts API - Services Package
=======================================

Business logic independent of HTTP:
    - credentials.py:    password hashing and access tokens
    - thought_query.py:  list parameters → filter/sort/page
    - thought_service.py, user_service.py: store operations and ownership rules
    - seed.py:           RESET_DB reseeding
"""
