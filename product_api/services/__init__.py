# Services package init
"""
Product API — Services Layer
==============================

What:  The layer between routes (HTTP) and the database (persistence).

Service Inventory:
    - ProductStore: data mapper for the products table, injected into
      routes with `Depends(get_product_store)`
"""
