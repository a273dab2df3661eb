"""Bootstrap roles and the first admin account: ``python -m apps.auth.create_admin``"""

import sys
from getpass import getpass
from core.database import SessionLocal
from core.transactions import transaction
from apps.auth.models import UserModel, Role
from apps.auth.services import ensure_roles, get_password_hash


def create_admin():
    db = SessionLocal()
    try:
        email = input("Admin email: ")
        name = input("Admin name: ")
        password = getpass("Admin password: ")

        with transaction(db):
            ensure_roles(db)
            if db.query(UserModel).filter(UserModel.email == email).first():
                print(f"A user with email {email} already exists.", file=sys.stderr)
                sys.exit(1)
            admin_role = db.query(Role).filter(Role.name == "admin").first()
            db.add(UserModel(
                name=name,
                email=email,
                hashed_password=get_password_hash(password),
                role=admin_role,
            ))
        print("Admin account created with admin role.")
        print("All roles (admin, technician, clerk) have been initialized.")
    finally:
        db.close()


if __name__ == "__main__":
    create_admin()
