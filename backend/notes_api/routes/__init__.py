# Routes package init
"""
Notes API — Routes Package
===========================

Route Inventory:
    - notes.py:   OPTIONS /notes   (CORS preflight)
                  GET     /notes   (list the caller's notes)
                  POST    /notes   (create a note)
    - health.py:  GET     /health  (service health check)

Routes handle HTTP concerns only: reading parameters, setting status codes
and headers. Validation lives in validators.py, queries in services/.
"""
