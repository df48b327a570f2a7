# Routes package init
"""
Product API — API Routes Package
==================================

Route Inventory:
    - products.py: GET/POST /products, GET/PUT/DELETE /products/{id}
    - health.py:   GET /health (service health check)

Routes stay thin: extract path params and body, call the ProductStore,
pick the status code. Storage logic lives in services.
"""
