"""
Service layer abstraction.

Each service encapsulates the business rules of a domain and talks to
storage only through the stores it is constructed with.  Services
return ``ServiceResult`` values instead of raising, leaving the choice
of status codes to the API handlers.
"""
