"""
Influencer Network Backend: Application Package
=================================================

What: Agency portal API for clients, leads, influencers, rate cards,
      campaigns, invoices, payments and payment-terms templates.
Who:  Imported by uvicorn (`influencer_network.main:app`), Alembic and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │     Routes + auth dependencies      │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (business rules)   │  ← totals, numbering, validation
    ├─────────────────────────────────────┤
    │       Models & Schemas (data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
