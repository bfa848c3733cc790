# Routes package init
"""
LabRecords Backend — API Routes Package
========================================

Route Inventory:
    - analisis.py: /api/analisis, /api/analisis/{id}  (laboratory analyses)
    - users.py:    /api/users, /api/users/{id}        (user profiles)
    - health.py:   GET /health                        (service health check)

Routes are THIN: extract path/query/body, call the resource service, return
its envelope. Failures are raised as application exceptions and rendered by
the handlers registered in main.py.
"""
