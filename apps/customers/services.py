from sqlalchemy.orm import Session
from typing import List
from fastapi import Depends
import logging

from apps.customers.models import Customer
from apps.customers.schemas import CustomerCreate
from core.database import get_db
from core.transactions import run_transaction

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, db: Session):
        self.db = db

    def get_customers(self) -> List[Customer]:
        return self.db.query(Customer).order_by(Customer.name, Customer.id).all()

    def create_customer(self, customer_data: CustomerCreate) -> Customer:
        def work(db: Session) -> Customer:
            customer = Customer(**customer_data.model_dump())
            db.add(customer)
            db.flush()
            return customer

        customer = run_transaction(self.db, work)
        logger.info(f"Customer {customer.id} ({customer.name}) created")
        return customer


# Dependency injection
def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    return CustomerService(db)
