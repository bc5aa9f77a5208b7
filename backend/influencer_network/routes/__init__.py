# Routes package init
"""
Influencer Network Backend: API Routes Package
===============================================

What:  HTTP route handlers that accept requests and return envelopes.
How:   One module per resource, each exposing an APIRouter under /api.

Route Inventory:
    - auth.py:           /api/auth            (register, login, passwords, profile)
    - users.py:          /api/users           (admin user management)
    - clients.py:        /api/clients
    - leads.py:          /api/leads           (pipeline, follow-ups, stats)
    - people.py:         /api/people          (influencer roster)
    - rate_cards.py:     /api/rate-cards
    - invoices.py:       /api/invoices        (send, record payment)
    - payments.py:       /api/payments
    - payment_terms.py:  /api/payment-terms   (milestone templates)
    - projects.py:       /api/projects        (campaigns and milestones)
    - stats.py:          /api/stats/dashboard
    - uploads.py:        /api/uploads
    - health.py:         /health, /api/health

Routes stay thin: parse the request, call a service, wrap the result.
Transactions are committed by the get_db_session dependency.
"""
