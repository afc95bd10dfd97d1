"""
API endpoints for suppliers of an economic group.
"""
from kontaflow.api.v1.third_parties import build_third_party_router
from kontaflow.schemas.third_party import SupplierCreate, SupplierRead, SupplierUpdate
from kontaflow.services.third_party_service import SupplierService

router = build_third_party_router(SupplierService, SupplierCreate, SupplierUpdate, SupplierRead)
