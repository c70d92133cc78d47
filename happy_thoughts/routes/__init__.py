"""
Happy Thoughts API - Routes Package
=====================================

Route Inventory:
    - root.py:      GET  /                      (welcome + route list)
    - users.py:     POST /users, POST /sessions, GET /secrets
    - thoughts.py:  /thoughts CRUD, likes and unlikes
    - health.py:    GET  /health                (database probe)

Routes stay thin: parse the request, call one service, wrap the result in
the response envelope.
"""
