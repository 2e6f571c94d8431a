# create_tables.py
import argparse
import os

from app.database import Base, SessionLocal, engine
from app.models import User, Goal, TaskList, Task, TimeLog  # noqa: F401
from app.utils.auth import create_access_token

DEFAULT_USER_EMAIL = os.getenv("DEFAULT_USER_EMAIL", "demo@example.com")
DEFAULT_USER_NAME = os.getenv("DEFAULT_USER_NAME", "Demo User")

def create_tables(drop_existing: bool = False):
    """Create all tables"""
    try:
        if drop_existing:
            # Drop in reverse dependency order
            Base.metadata.drop_all(bind=engine)
            print("🗑️  Existing tables dropped")

        Base.metadata.create_all(bind=engine)
        print("✅ All tables created successfully!")

        create_default_user()

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        raise

def create_default_user():
    """Create a default user and print a development bearer token for it"""
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == DEFAULT_USER_EMAIL).first()
        if user is None:
            user = User(name=DEFAULT_USER_NAME, email=DEFAULT_USER_EMAIL, is_active=True)
            db.add(user)
            db.commit()
            db.refresh(user)
            print("✅ Default user created!")
        else:
            print("ℹ️  Default user already exists")

        print(f"   Email: {user.email}")
        print(f"   Token: {create_access_token(data={'sub': user.email})}")
    finally:
        db.close()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the goal tracker database schema")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    create_tables(drop_existing=args.drop)
