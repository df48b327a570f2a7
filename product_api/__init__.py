"""
Product API — Application Package Initializer
==============================================

What: Marks the `product_api` directory as a Python package.
Who:  Imported by uvicorn, pytest, and the `python -m product_api` entry point.

Architecture Note:
    The service is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← decode, status codes, encode
    ├─────────────────────────────────────┤
    │      Services (Data Mapper)         │  ← ProductStore: ORM calls
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
