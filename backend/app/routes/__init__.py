"""
PlotRegistry Backend — API Routes Package
=========================================

Route Inventory:
    - plots.py:   GET/POST/PATCH/DELETE /plots, GET /plots/{id}
    - health.py:  GET /health

Routes are thin: they extract the request data, call the service and
return its envelope. Business rules live in app.services.
"""
