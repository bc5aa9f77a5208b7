# Services package init
"""
Influencer Network Backend: Services Layer
===========================================

What:  Business rules between the routes (HTTP) and the ORM models.
How:   Module-level service singletons take an AsyncSession, flush their
       changes and leave the commit to the request's session dependency.

Service Inventory:
    - AuthService / UserService:  accounts, tokens, admin management
    - ClientService, LeadService, PersonService, RateCardService
    - InvoiceService:  totals, status derivation, payment recording
    - PaymentService:  payment numbers, allocation checks, stats
    - PaymentTermsService / ProjectService:  milestone templates and campaigns
    - StatsService:  dashboard counters
    - FileService:  upload validation, storage and cleanup
    - query:  pagination, search and date-range helpers
"""
