"""
API endpoints for customers of an economic group.
"""
from kontaflow.api.v1.third_parties import build_third_party_router
from kontaflow.schemas.third_party import CustomerCreate, CustomerRead, CustomerUpdate
from kontaflow.services.third_party_service import CustomerService

router = build_third_party_router(CustomerService, CustomerCreate, CustomerUpdate, CustomerRead)
