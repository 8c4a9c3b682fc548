import logging

from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import (
    create_document, get_db, get_documents, parse_business_id,
    serialize_document, update_document,
)
from errors import ResourceNotFoundError, store_errors
from request_body import read_body
from schemas import Customer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/customers", tags=["customers"])

COLLECTION = "customers"
NOT_FOUND = "Compte client non trouvé"
DELETED = "Compte client supprimé avec succès"
# stored as datetimes, served as YYYY-MM-DD
DATE_FIELDS = ("dateOfBirth",)


def serialize_customer(doc):
    return serialize_document(doc, DATE_FIELDS)


# ---------------------------------------------------------------------------------
# Customers CRUD
# ---------------------------------------------------------------------------------
@router.get("")
def list_customers(db: Database = Depends(get_db)):
    with store_errors():
        docs = get_documents(db, COLLECTION)
    return [serialize_customer(d) for d in docs]


@router.get("/{customer_id}")
def get_customer(customer_id: str, db: Database = Depends(get_db)):
    with store_errors():
        doc = db[COLLECTION].find_one({"id": parse_business_id(customer_id)})
    if not doc:
        raise ResourceNotFoundError(NOT_FOUND, customer_id)
    return serialize_customer(doc)


@router.post("", status_code=201)
def create_customer(body=Depends(read_body), db: Database = Depends(get_db)):
    with store_errors():
        customer = Customer.model_validate(body)
        doc = create_document(db, COLLECTION, customer)
    logger.info("Customer %s created", doc.get("id"))
    return serialize_customer(doc)


@router.put("/{customer_id}")
def update_customer(customer_id: str, body=Depends(read_body), db: Database = Depends(get_db)):
    with store_errors():
        business_id = parse_business_id(customer_id)
        changes = Customer.model_validate(body)
        doc = update_document(db, COLLECTION, business_id, changes)
    if not doc:
        raise ResourceNotFoundError(NOT_FOUND, customer_id)
    return serialize_customer(doc)


@router.delete("/{customer_id}")
def delete_customer(customer_id: str, db: Database = Depends(get_db)):
    with store_errors():
        doc = db[COLLECTION].find_one_and_delete({"id": parse_business_id(customer_id)})
    if not doc:
        raise ResourceNotFoundError(NOT_FOUND, customer_id)
    logger.info("Customer %s deleted", customer_id)
    return {"message": DELETED}
