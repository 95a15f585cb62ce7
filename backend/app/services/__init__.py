"""
PlotRegistry Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services take the request's AsyncSession and a parsed payload,
       apply the plot rules, and return response envelopes.

Service Inventory:
    - PlotService: list / get / create / update / delete plots
"""
