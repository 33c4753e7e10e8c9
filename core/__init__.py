# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the Conduit business logic:
# - models/: Pydantic schemas for request validation and responses
# - services/: Async service classes working on an AsyncSession
#
# Routers stay thin: they parse the request, resolve the caller and hand
# off to a service. Services raise ConduitException subclasses.
# =============================================================================
